"""Shared query and response literals for the test suites."""

from __future__ import annotations

PERSON_ID = "cGVvcGxlOjEz"
SPECIES_ID = "c3BlY2llczoz"
PLANET_ID = "cGxhbmV0czoxNA=="

PERSON_QUERY = """{
  person(id: "cGVvcGxlOjEz") {
    id
    name
    height
    species {
      id
      name
      homeworld {
        id
        name
      }
    }
  }
}"""

PERSON_RESPONSE = {
    "data": {
        "person": {
            "id": PERSON_ID,
            "name": "Chewbacca",
            "height": 228,
            "species": {
                "id": SPECIES_ID,
                "name": "Wookie",
                "homeworld": {
                    "id": PLANET_ID,
                    "name": "Kashyyyk",
                },
            },
        }
    }
}
