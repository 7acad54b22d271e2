"""
tagcore subcommands
"""

from . import (lexica,
               train,
               bootstrap,
               decode,
               evaluate)

SUBCOMMANDS = [lexica, train, bootstrap, decode, evaluate]
