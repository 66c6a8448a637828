"""
JSON schemas for dialog data files.
"""

STATEMENT_SCHEMA = {
    "oneOf": [
        {"type": "string"},
        {
            "type": "array",
            "minItems": 1,
            "items": {"type": "string"},
        },
        {
            "type": "object",
            "required": ["statement"],
            "properties": {
                "statement": {"type": "string"},
            },
        },
    ],
}

CHARACTER_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "expressions": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "default_expression": {"type": "string"},
        "defaultExpression": {"type": "string"},
        "dialog_type": {"enum": ["pop", "vn"]},
        "dialogType": {"enum": ["pop", "vn"]},
        "position": {"type": "string"},
        "dialog_options": {"type": "object"},
        "dialogOptions": {"type": "object"},
    },
    "additionalProperties": False,
}

# characters/*.json: key -> character
CHARACTERS_FILE_SCHEMA = {
    "type": "object",
    "additionalProperties": CHARACTER_SCHEMA,
}

# script/*.json: same layout as compiled text scripts
SCRIPT_FILE_SCHEMA = {
    "type": "object",
    "required": ["labels"],
    "properties": {
        "id": {"type": "string"},
        "labels": {
            "type": "object",
            "additionalProperties": {
                "type": "array",
                "items": STATEMENT_SCHEMA,
            },
        },
        "sequence": {
            "type": "array",
            "items": STATEMENT_SCHEMA,
        },
    },
}
