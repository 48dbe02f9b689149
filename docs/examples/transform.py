from shapeval import object_, string

custom = object_({"firstname": string(), "lastname": string()}).transform(
    lambda data: {"name": f"{data['firstname']} {data['lastname']}"}
)
print(custom.parse({"firstname": "foo", "lastname": "bar"}))
