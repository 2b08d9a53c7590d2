"""Render a list of planets with a loop and a partial."""

from tinplate import compile

template = compile(
    "The first planet's name is: {{first.name}}. All of them are:"
    "{% for planets as planet %}{> entry}{% end %}\n",
    partials={"entry": "\n    - {{planet.name}}{% if planet.rings %} (ringed){% end %}"},
)

planets = [
    {"name": "Mercury"},
    {"name": "Venus"},
    {"name": "Earth"},
    {"name": "Mars"},
    {"name": "Jupiter", "rings": True},
    {"name": "Saturn", "rings": True},
    {"name": "Uranus", "rings": True},
    {"name": "Neptune", "rings": True},
]

print(template.render({"first": planets[0], "planets": planets}), end="")
