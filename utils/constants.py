# utils/constants.py
# Form options and display tables shared by the web form, the API and the CLI.

EXPERTISE_LEVELS = [
    {"value": "novice", "label": "Novice", "description": "First time doing this task"},
    {"value": "general", "label": "General", "description": "Some basic experience"},
    {"value": "experienced", "label": "Experienced", "description": "Done this many times"},
    {"value": "professional", "label": "Professional", "description": "Trained/certified in this area"},
]

ENVIRONMENTS = [
    {"value": "home", "label": "Home / Residential"},
    {"value": "garage", "label": "Garage / Workshop"},
    {"value": "outdoor", "label": "Outdoor / Yard"},
    {"value": "kitchen", "label": "Kitchen"},
    {"value": "commercial", "label": "Commercial / Job Site"},
    {"value": "remote", "label": "Remote / Wilderness"},
]

DEFAULT_EXPERTISE = "general"
DEFAULT_ENVIRONMENT = "home"
MAX_TASK_LENGTH = 2000

EXAMPLE_TASKS = [
    "Changing my car's brake pads in the driveway",
    "Deep frying a turkey for Thanksgiving",
    "Cutting down a dead tree in my backyard with a chainsaw",
    "Cleaning the gutters using an extension ladder",
    "Pressure washing my deck and siding",
    "Replacing an electrical outlet in my kitchen",
    "Using muriatic acid to clean concrete stains",
]

HAZARD_CATEGORY_LABELS = {
    "thermal": "Thermal",
    "chemical": "Chemical",
    "mechanical": "Mechanical",
    "electrical": "Electrical",
    "biological": "Biological",
    "ergonomic": "Ergonomic",
    "environmental": "Environmental",
    "psychological": "Psychological",
}

# ordered most to least effective
CONTROL_HIERARCHY = [
    {"key": "elimination", "label": "Elimination", "description": "Remove the hazard entirely"},
    {"key": "substitution", "label": "Substitution", "description": "Use safer alternatives"},
    {"key": "engineering", "label": "Engineering Controls", "description": "Physical barriers and modifications"},
    {"key": "administrative", "label": "Administrative Controls", "description": "Procedures and training"},
    {"key": "ppe", "label": "PPE", "description": "Personal protective equipment"},
]

RISK_COLORS = {
    "low": {"bg": "#22c55e", "bg_light": "#dcfce7", "text": "#15803d"},
    "moderate": {"bg": "#eab308", "bg_light": "#fef9c3", "text": "#a16207"},
    "high": {"bg": "#f97316", "bg_light": "#ffedd5", "text": "#c2410c"},
    "critical": {"bg": "#ef4444", "bg_light": "#fee2e2", "text": "#b91c1c"},
}


def expertise_values():
    return [e["value"] for e in EXPERTISE_LEVELS]


def environment_values():
    return [e["value"] for e in ENVIRONMENTS]
