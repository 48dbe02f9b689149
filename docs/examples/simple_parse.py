from shapeval import number, object_

point = object_({"x": number(), "y": number()})
print(point.parse({"x": 3.14, "y": 1.5, "z": 0}))
