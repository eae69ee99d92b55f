# app.py
import logging
import threading
import uuid
from collections import OrderedDict
from typing import Optional

from flask import Flask, jsonify, redirect, render_template, request, session, url_for
from flask_cors import CORS

from briefs.analyst import analyze_task
from briefs.risk import (
    LIKELIHOOD_SCALE,
    RISK_LEVEL_INFO,
    SEVERITY_SCALE,
    level_counts,
    risk_matrix,
)
from briefs.session import SessionController
from utils.config import Settings, load_settings
from utils.constants import (
    CONTROL_HIERARCHY,
    DEFAULT_ENVIRONMENT,
    DEFAULT_EXPERTISE,
    ENVIRONMENTS,
    EXAMPLE_TASKS,
    EXPERTISE_LEVELS,
    MAX_TASK_LENGTH,
    RISK_COLORS,
)
from utils.errors import InvalidInputError, RiskBriefError, UnknownError, user_message

logger = logging.getLogger(__name__)

# controllers kept in memory before the least recently used is dropped
MAX_SESSIONS = 1000


def risk_color(level, shade: str = "bg") -> str:
    """Colour token for a risk level; unknown levels get the moderate colour."""
    key = getattr(level, "value", level)
    return RISK_COLORS.get(key, RISK_COLORS["moderate"])[shade]


def _log_transition(old, new):
    if new.loading and not old.loading:
        logger.info("Analysis started (%s, %s)", new.last_request.expertise, new.last_request.environment)
    elif new.error and new.error != old.error:
        logger.info("Session error shown: %s", new.error)
    elif new.assessment is not None and old.assessment is None:
        logger.info("Brief ready: %d hazards", len(new.assessment.hazards))


def create_app(settings: Optional[Settings] = None, analyze=analyze_task) -> Flask:
    # missing API key fails here, at startup
    settings = settings or load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # session id -> controller, in memory only, least recently used first
    controllers = OrderedDict()
    app.extensions["risk_brief_sessions"] = controllers
    sessions_lock = threading.Lock()
    app.config.setdefault("MAX_SESSIONS", MAX_SESSIONS)

    app.jinja_env.filters["risk_color"] = risk_color

    def existing_controller() -> Optional[SessionController]:
        sid = session.get("sid")
        with sessions_lock:
            if sid is None or sid not in controllers:
                return None
            controllers.move_to_end(sid)
            return controllers[sid]

    def current_controller() -> SessionController:
        controller = existing_controller()
        if controller is not None:
            return controller

        sid = session.get("sid") or uuid.uuid4().hex
        session["sid"] = sid
        controller = SessionController(settings, analyze=analyze)
        controller.subscribe(_log_transition)
        with sessions_lock:
            controllers[sid] = controller
            while len(controllers) > app.config["MAX_SESSIONS"]:
                evicted, _ = controllers.popitem(last=False)
                logger.info("Evicted idle session %s", evicted[:8])
        return controller

    # HTML form

    @app.get("/")
    def index():
        # visitors without a session see an idle form; nothing is stored for them
        controller = existing_controller() or SessionController(settings, analyze=analyze)
        state = controller.state
        last = state.last_request

        task = last.task if last else ""
        example = request.args.get("example", type=int)
        if example is not None and 0 <= example < len(EXAMPLE_TASKS):
            task = EXAMPLE_TASKS[example]

        done, total, percent = controller.checklist_progress
        return render_template(
            "index.html",
            state=state,
            task=task,
            expertise=last.expertise if last else DEFAULT_EXPERTISE,
            environment=last.environment if last else DEFAULT_ENVIRONMENT,
            confirm_reset=request.args.get("confirm_reset") == "1"
            and controller.needs_reset_confirmation,
            progress={"done": done, "total": total, "percent": percent},
            matrix=risk_matrix(),
            level_info=RISK_LEVEL_INFO,
            expertise_levels=EXPERTISE_LEVELS,
            environments=ENVIRONMENTS,
            example_tasks=EXAMPLE_TASKS,
            control_hierarchy=CONTROL_HIERARCHY,
            max_task_length=MAX_TASK_LENGTH,
            demo_mode=settings.mock,
        )

    @app.post("/analyze")
    def analyze_form():
        current_controller().analyze(
            request.form.get("task", ""),
            request.form.get("expertise", DEFAULT_EXPERTISE),
            request.form.get("environment", DEFAULT_ENVIRONMENT),
        )
        return redirect(url_for("index"))

    @app.post("/retry")
    def retry():
        current_controller().retry()
        return redirect(url_for("index"))

    @app.post("/dismiss")
    def dismiss():
        current_controller().clear_error()
        return redirect(url_for("index"))

    @app.post("/reset")
    def reset():
        controller = current_controller()
        if controller.needs_reset_confirmation and request.form.get("confirm") != "1":
            return redirect(url_for("index", confirm_reset="1"))
        controller.reset()
        return redirect(url_for("index"))

    @app.post("/checklist/<int:index>")
    def toggle_checklist(index: int):
        current_controller().toggle_checklist_item(index)
        return redirect(url_for("index"))

    # JSON API

    @app.post("/api/analyze")
    def api_analyze():
        """
        JSON in:
        {
          "task": "...",              # required
          "expertise": "general",     # optional
          "environment": "home"       # optional
        }
        """
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict):
            data = {}

        try:
            assessment = analyze(
                str(data.get("task") or ""),
                data.get("expertise") or DEFAULT_EXPERTISE,
                data.get("environment") or DEFAULT_ENVIRONMENT,
                settings,
            )
        except InvalidInputError as e:
            return jsonify({"error": user_message(e), "kind": e.kind}), 400
        except RiskBriefError as e:
            logger.error("API analysis failed (%s): %s", e.kind, e)
            return jsonify({"error": user_message(e), "kind": e.kind}), 502
        except Exception as e:
            logger.exception("Unexpected API analysis error")
            err = UnknownError(str(e))
            return jsonify({"error": user_message(err), "kind": err.kind}), 500

        risk = assessment.risk_assessment
        body = assessment.to_wire()
        body["riskScore"] = risk.score
        body["riskLevel"] = risk.computed_level.value if risk.computed_level else None
        return jsonify(body)

    @app.get("/api/matrix")
    def api_matrix():
        cells = [
            [dict(cell, level=cell["level"].value) for cell in row]
            for row in risk_matrix()
        ]
        return jsonify({
            "cells": cells,
            "levels": {level.value: info for level, info in RISK_LEVEL_INFO.items()},
            "counts": {level.value: n for level, n in level_counts().items()},
            "severityScale": [e._asdict() for e in SEVERITY_SCALE],
            "likelihoodScale": [e._asdict() for e in LIKELIHOOD_SCALE],
        })

    @app.get("/api/options")
    def api_options():
        return jsonify({
            "expertiseLevels": EXPERTISE_LEVELS,
            "environments": ENVIRONMENTS,
            "exampleTasks": EXAMPLE_TASKS,
            "maxTaskLength": MAX_TASK_LENGTH,
        })

    return app


if __name__ == "__main__":
    # Run dev server
    create_app().run(host="127.0.0.1", port=5000, debug=True)
