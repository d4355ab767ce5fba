"""pyfa: deterministic finite automaton simulation."""

from pyfa.core.automaton import Automaton
from pyfa.core.build import accepts, build_automaton
from pyfa.core.errors import AutomatonError, InvalidSymbolError, MalformedConfigurationError
from pyfa.core.types import EMPTY_STRING, AutomatonConfig, AutomatonSummary, TransitionSpec

__version__ = "0.1.0"

__all__ = [
    "Automaton",
    "AutomatonConfig",
    "AutomatonError",
    "AutomatonSummary",
    "EMPTY_STRING",
    "InvalidSymbolError",
    "MalformedConfigurationError",
    "TransitionSpec",
    "accepts",
    "build_automaton",
]
