# Sample brief served in demo mode (RISK_BRIEF_MOCK=1), no API call made.
from briefs import Assessment

MOCK_ASSESSMENT = {
    "taskSummary": (
        "Cutting down a dead tree using a chainsaw in a residential backyard setting, "
        "requiring proper safety equipment and technique to manage falling hazards and "
        "equipment risks."
    ),
    "parsedContext": {
        "actions": ["cutting", "felling", "sectioning", "clearing"],
        "materials": ["dead wood", "chainsaw fuel", "bar oil"],
        "tools": ["chainsaw", "safety chaps", "helmet", "gloves", "safety glasses"],
        "environmentFactors": ["uneven ground", "nearby structures", "overhead power lines", "wind conditions"],
    },
    "hazards": [
        {
            "category": "mechanical",
            "description": "Chainsaw kickback",
            "mechanism": (
                "Sudden upward rotation of the guide bar when the chain nose contacts an "
                "object, potentially causing severe lacerations or loss of limb control"
            ),
        },
        {
            "category": "mechanical",
            "description": "Falling tree or branches",
            "mechanism": (
                "Unpredictable fall direction due to dead wood brittleness, wind, or "
                "improper notch cuts causing crush injuries"
            ),
        },
        {
            "category": "ergonomic",
            "description": "Chainsaw vibration and weight",
            "mechanism": "Extended use causing hand-arm vibration syndrome, fatigue, and reduced reaction time",
        },
        {
            "category": "thermal",
            "description": "Hot chainsaw components",
            "mechanism": "Contact burns from muffler, chain brake, or overheated bar during or after operation",
        },
        {
            "category": "environmental",
            "description": "Uneven terrain",
            "mechanism": "Slips, trips, and falls while operating equipment or retreating from falling tree",
        },
    ],
    "riskAssessment": {
        "severity": 4,
        "likelihood": 3,
        "overallLevel": "high",
        "rationale": (
            "Tree felling involves multiple serious hazards with potential for major injury. "
            "The combination of powerful cutting equipment, unpredictable falling mass, and "
            "outdoor variables creates significant risk even for experienced operators."
        ),
    },
    "controls": {
        "elimination": [
            "Hire a professional arborist for large or complex trees",
            "Consider leaving standing dead wood as wildlife habitat if safe",
        ],
        "substitution": [
            "Use a smaller electric chainsaw for manageable sections",
            "Rent a lift or bucket truck instead of climbing",
        ],
        "engineering": [
            "Use felling wedges to control fall direction",
            "Install guide ropes to direct the fall",
            "Clear two escape routes at 45-degree angles from fall direction",
        ],
        "administrative": [
            "Check weather conditions - avoid windy days",
            "Notify neighbors and establish a danger zone",
            "Have a spotter who can see the entire tree",
            "Plan the cut sequence before starting",
        ],
        "ppe": [
            "Chainsaw chaps or cut-resistant trousers",
            "Helmet with face shield and hearing protection",
            "Cut-resistant gloves",
            "Steel-toe boots with good ankle support",
        ],
    },
    "emergencyActions": [
        "Call emergency services immediately for any serious injury",
        "Apply direct pressure to bleeding wounds with a clean cloth",
        "Do not move anyone pinned under a fallen tree unless they are in immediate danger",
        "Shut off the chainsaw and set the chain brake before giving aid",
    ],
    "preTaskChecklist": [
        "Inspect the chainsaw chain tension and sharpness",
        "Confirm the chain brake works",
        "Check for overhead power lines near the tree",
        "Plan and clear two escape routes",
        "Put on all required PPE",
        "Make sure someone knows where you are working",
    ],
    "ethicalNote": (
        "Confirm the tree is on your property and that felling it will not endanger "
        "neighbors, passers-by, or their property."
    ),
    "additionalConsiderations": (
        "Dead trees are brittle and can fail unpredictably; if the trunk is hollow or the "
        "lean is toward a structure, call a professional."
    ),
}


def mock_assessment() -> Assessment:
    return Assessment.model_validate(MOCK_ASSESSMENT)
