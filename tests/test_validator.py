import json

import pytest

from briefs import Assessment, HazardCategory
from briefs.validator import REQUIRED_FIELDS, extract_json_candidate, parse_assessment_response
from utils.errors import MissingFieldError, ParseError


def test_round_trip_plain_json(payload, payload_text):
    assessment = parse_assessment_response(payload_text)
    assert isinstance(assessment, Assessment)
    assert assessment.to_wire() == payload


def test_round_trip_with_surrounding_prose(payload, payload_text):
    text = f"Here is the safety brief you asked for:\n\n{payload_text}\n\nStay safe!"
    assert parse_assessment_response(text).to_wire() == payload


def test_defaults_applied_to_optional_fields(payload):
    del payload["parsedContext"]["tools"]
    payload["controls"] = {"ppe": ["gloves"]}
    del payload["ethicalNote"]
    payload["additionalConsiderations"] = None
    del payload["riskAssessment"]["rationale"]

    assessment = parse_assessment_response(json.dumps(payload))

    assert assessment.parsed_context.tools == []
    assert assessment.parsed_context.actions == payload["parsedContext"]["actions"]
    assert assessment.controls.ppe == ["gloves"]
    assert assessment.controls.elimination == []
    assert assessment.controls.administrative == []
    assert assessment.ethical_note == ""
    assert assessment.additional_considerations == ""
    assert assessment.risk_assessment.rationale == ""


def test_wrong_typed_optional_lists_become_empty(payload):
    payload["parsedContext"] = "chainsaw work"
    payload["controls"]["engineering"] = "use wedges"
    assessment = parse_assessment_response(json.dumps(payload))
    assert assessment.parsed_context.actions == []
    assert assessment.parsed_context.environment_factors == []
    assert assessment.controls.engineering == []
    assert assessment.controls.elimination == payload["controls"]["elimination"]


def test_no_braces_is_parse_error():
    with pytest.raises(ParseError, match="No valid JSON"):
        parse_assessment_response("I cannot help with that request.")


def test_close_before_open_is_parse_error():
    with pytest.raises(ParseError):
        parse_assessment_response("} nothing here {")


def test_invalid_json_between_braces_is_parse_error():
    with pytest.raises(ParseError, match="Failed to parse JSON"):
        parse_assessment_response('{"taskSummary": "x", "hazards": [}')


def test_stray_braces_in_prose_break_extraction(payload_text):
    # first "{" to last "}" swallows the prose braces too
    with pytest.raises(ParseError):
        parse_assessment_response("Use {caution}. " + payload_text)


@pytest.mark.parametrize("bad", [None, b"{}", 42])
def test_non_string_input_is_parse_error(bad):
    with pytest.raises(ParseError):
        parse_assessment_response(bad)


def test_missing_hazards_names_field(payload):
    del payload["hazards"]
    with pytest.raises(MissingFieldError) as exc:
        parse_assessment_response(json.dumps(payload))
    assert exc.value.field == "hazards"
    assert "hazards" in str(exc.value)


def test_first_missing_field_is_reported(payload):
    del payload["controls"]
    del payload["parsedContext"]
    with pytest.raises(MissingFieldError) as exc:
        parse_assessment_response(json.dumps(payload))
    assert exc.value.field == "parsedContext"


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_each_required_field(payload, field):
    del payload[field]
    with pytest.raises(MissingFieldError) as exc:
        parse_assessment_response(json.dumps(payload))
    assert exc.value.field == field


@pytest.mark.parametrize(
    "risk",
    [
        {"likelihood": 3, "overallLevel": "high"},
        {"severity": "4", "likelihood": 3, "overallLevel": "high"},
        {"severity": True, "likelihood": 3, "overallLevel": "high"},
        {"severity": 4, "likelihood": None, "overallLevel": "high"},
        {"severity": 4, "likelihood": 3, "overallLevel": ""},
        {"severity": 4, "likelihood": 3},
        "high",
    ],
)
def test_bad_risk_assessment_structure(payload, risk):
    payload["riskAssessment"] = risk
    with pytest.raises(MissingFieldError, match="Invalid riskAssessment structure") as exc:
        parse_assessment_response(json.dumps(payload))
    assert exc.value.field == "riskAssessment"


def test_fractional_severity_is_missing_field(payload):
    payload["riskAssessment"]["severity"] = 3.5
    with pytest.raises(MissingFieldError) as exc:
        parse_assessment_response(json.dumps(payload))
    assert exc.value.field == "riskAssessment.severity"


def test_whole_float_severity_accepted(payload):
    payload["riskAssessment"]["severity"] = 4.0
    assessment = parse_assessment_response(json.dumps(payload))
    assert assessment.risk_assessment.severity == 4
    assert assessment.risk_assessment.score == 12


def test_out_of_range_rating_is_kept_but_unscored(payload):
    payload["riskAssessment"]["severity"] = 7
    risk = parse_assessment_response(json.dumps(payload)).risk_assessment
    assert risk.severity == 7
    assert risk.in_range is False
    assert risk.score is None
    assert risk.computed_level is None
    assert risk.severity_label == "Unknown"
    assert risk.likelihood_label == "Possible"


def test_malformed_required_list_names_path(payload):
    payload["emergencyActions"] = "call 911"
    with pytest.raises(MissingFieldError) as exc:
        parse_assessment_response(json.dumps(payload))
    assert exc.value.field == "emergencyActions"


def test_hazard_without_category_names_path(payload):
    del payload["hazards"][1]["category"]
    with pytest.raises(MissingFieldError) as exc:
        parse_assessment_response(json.dumps(payload))
    assert exc.value.field == "hazards.1.category"


def test_hazard_categories_normalized(payload):
    payload["hazards"][0]["category"] = " Electrical "
    payload["hazards"][1]["category"] = "radiation"
    hazards = parse_assessment_response(json.dumps(payload)).hazards
    assert hazards[0].category == "electrical"
    assert hazards[0].known_category is HazardCategory.ELECTRICAL
    assert hazards[1].known_category is None
    assert hazards[0].category_label == "Electrical"
    assert hazards[1].category_label == "radiation"


def test_escaped_lone_surrogate_is_parse_error(payload):
    payload["hazards"][0]["description"] = "\ud800 kickback"
    text = json.dumps(payload)
    assert "\\ud800" in text
    with pytest.raises(ParseError, match="not valid UTF-8"):
        parse_assessment_response(text)


def test_raw_lone_surrogate_is_parse_error(payload_text):
    text = payload_text.replace("Chainsaw kickback", "\ud800 kickback")
    with pytest.raises(ParseError, match="not valid UTF-8"):
        parse_assessment_response(text)


def test_computed_risk_on_valid_assessment(payload_text):
    risk = parse_assessment_response(payload_text).risk_assessment
    assert risk.score == 12
    assert risk.computed_level == "high"
    assert risk.severity_label == "Major"


def test_extract_candidate_spans_first_to_last_brace():
    assert extract_json_candidate('x {"a": {"b": 1}} y') == '{"a": {"b": 1}}'
