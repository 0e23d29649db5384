from rich.pretty import pprint

from argot import *

cli = parser(
    {"name": "greet", "description": "Say hello a few times.", "usage": "greet [options] <who>"},
    [
        {"name": "who", "flag": False, "required": True, "help": "who to greet"},
        {"name": ["times", "n"], "type": "number", "default": 1, "help": "repeat count"},
        {"name": ["loud", "l"], "help": "shout"},
    ],
).help().version("0.0.0")


if __name__ == '__main__':
    pprint(cli.run())
