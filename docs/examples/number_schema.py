from shapeval import ValidationError, number, object_

number_fields = object_({"simple": number().int(), "range": number().min(0).max(10)})
print(number_fields.parse({"simple": 98, "range": 5}))

try:
    number_fields.parse({"simple": "100", "range": 12})
except ValidationError as exc:
    print(f"ValidationError: {exc}")
