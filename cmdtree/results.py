"""
cmdtree parse results.

A Result is produced once per Parser.parse() call and never changes afterwards.
It records only names and strings (no parser references), so it can be stored,
compared or handed to a handler without keeping the command tree alive.
"""
from .utils import *


class Result(metaclass=IntrospectableType):
    """
    Structured outcome of one parse.

    Fields (read-only)
    - command: tuple[str, ...], the subcommand names traversed root-to-leaf.
    - flags: Mapping[str, bool], only flags that were present (always True).
    - options: Mapping[str, str], option name → value (last occurrence wins).
    - positionals: tuple[str, ...], every token not consumed otherwise.
    - args: alias of positionals.
    """
    __introspectable__ = (
        "command",
        "flags",
        "options",
        "positionals",
    )

    def __init__(self, command=(), flags=Unset, options=Unset, positionals=(), /):
        self._command = list(command)
        self._flags = dict(coalesce(flags, {}))
        self._options = dict(coalesce(options, {}))
        self._positionals = list(positionals)

    @property
    def args(self):
        return self.positionals

    def flag(self, name, /):
        """
        Return whether the flag was present; unknown names read as False.
        """
        return self._flags.get(name, False)

    def option(self, name, default=None, /):
        """
        Return the captured option value, or default (None) when it was not given.
        """
        return self._options.get(name, default)

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return (
            self._command == other._command and
            self._flags == other._flags and
            self._options == other._options and
            self._positionals == other._positionals
        )

    __hash__ = None


__all__ = (
    "Result",
)
