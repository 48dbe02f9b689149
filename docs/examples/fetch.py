from shapeval import array, object_, string
from shapeval.remote import fetch

StarWarsPeople = object_({"results": array(object_({"name": string()}))})

people = fetch("https://swapi.dev/api/people/", StarWarsPeople)
print([person["name"] for person in people["results"]])
