from shapeval import ValidationError, object_, string

contact = object_(
    {
        "name": string().min(1),
        "phoneNumber": string().min(5).max(20).optional(),
        "email": string().email(),
        "website": string().url().optional(),
    }
)
print(contact.parse({"name": "Tony", "email": "tony@example.com"}))

try:
    contact.parse({"name": "Tony", "email": "tony", "phoneNumber": "1"})
except ValidationError as exc:
    print(f"ValidationError: {exc}")
