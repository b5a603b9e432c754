# example_usage.py
from response_schema import Catalog, TypeValidationError, create_validator
from response_schema.log import configure_logging, get_logger

configure_logging()  # honours LOG_LEVEL / DEBUG
log = get_logger("example", api_token="never-printed")

# 1) validate records returned by an external API
catalog = Catalog.load("recharge.json")
customers = [
    {"id": 1, "email": "jane@example.com", "created_at": "2025-06-07T12:34:56Z"},
    {"id": 2, "email": "not-an-email"},
]
for record in customers:
    try:
        catalog.validate_response("customer", record)
    except TypeValidationError as exc:
        log.error("rejected customer", fields={"id": record.get("id")}, exc_info=exc)
    else:
        log.info("accepted customer", fields={"id": record["id"]})

# 2) ad-hoc schema used as a pass-through guard
finding = create_validator({
    "type": "object",
    "properties": {
        "finding_id": {"type": "uuid", "required": True},
        "severity":   {"type": "string", "enum": ["low", "medium", "high"]},
        "confidence": {"type": "number", "min": 0, "max": 1},
        "observables": {"type": "array", "items": {"type": "string", "minLength": 1}},
    },
})
checked = finding({
    "finding_id": "123e4567-e89b-12d3-a456-426614174000",
    "severity": "high",
    "confidence": 0.85,
    "observables": ["evil.example.com"],
})
log.info("finding ok", fields={"finding_id": checked["finding_id"]})
