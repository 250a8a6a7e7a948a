r"""
cmdtree argument declarations.

Overview
- Flag: named, presence-only switch (no payload), e.g. -d/--detach.
- Option: named, value-bearing switch, e.g. -c/--config app.conf or --config=app.conf.

Both are plain declarations: they hold a long name, an optional short alias and
an optional help text, and know which raw tokens spell them. Values are never
converted; a flag reads as a boolean and an option as the string that followed it.

Metadata (sanitized on construction)
- name: str, the long name (matched as "--<name>").
- short: str, the short alias (matched as "-<short>"); "" disables it.
- descr: str, help text shown by the usage renderer; "" means none.
- choices (Option only): tuple[str, ...], shown in help but never enforced.

Validation highlights
- Only shapes are checked: every field must be a string (TypeError otherwise).
- Empty names are accepted as-is; collisions are resolved by the owning parser.

Quick example:
    >>> detach = Flag("detach", "d", "run in background")
    >>> detach.spells("-d")
    True
    >>> Option("mode", "m", "", "fast", "safe").capture("--mode=fast", ())
    ('fast', 1)
"""
from .utils import *


def _sanitize(cls, field, object):
    if not isinstance(object, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    return object


class Argument(metaclass=IntrospectableType):
    """
    Common base for named switches (flags and options).

    Provides the two token spellings shared by both kinds: the long form
    "--<name>" and, when a short alias exists, the short form "-<short>".
    """
    __introspectable__ = (
        "name",
        "short",
        "descr",
    )

    def __init__(self, name, short="", descr="", /):
        cls = type(self)
        self._name = _sanitize(cls, "name", name)
        self._short = _sanitize(cls, "short", short)
        self._descr = _sanitize(cls, "descr", descr)

    @property
    def spellings(self):
        """
        Return the exact tokens that name this argument, long form first.
        """
        if self.short:
            return "--" + self.name, "-" + self.short
        return ("--" + self.name,)

    def spells(self, token, /):
        """
        Return True when token is exactly one of the spellings of this argument.
        """
        return token in self.spellings


class Flag(Argument):
    """
    Presence-only switch.

    A flag never consumes a value: "--<name>" or "-<short>" sets it and
    anything else (including "--<name>=x") does not match.
    """


class Option(Argument):
    """
    Value-bearing switch.

    Accepted forms, tried in this order:
    1. "--<name>=<value>"
    2. "-<short>=<value>" (only with a short alias)
    3. "--<name> <value>" or "-<short> <value>" (the following token is the value)

    choices are kept for help rendering only; any value is accepted.
    """
    __introspectable__ = (
        "name",
        "short",
        "descr",
        "choices",
    )

    def __init__(self, name, short="", descr="", /, *choices):
        super().__init__(name, short, descr)
        self._choices = [_sanitize(type(self), "choices", choice) for choice in choices]

    def capture(self, token, following, /):
        """
        Try to read a value for this option starting at token.

        Parameters
        - token: str, the current raw token.
        - following: Sequence[str], the tokens after it.

        Returns
        - (value, consumed) when token spells this option, consumed being 1 for
          the inline forms and 2 for the spaced form.
        - None when token does not match, or when the spaced form has nothing
          left to take as its value.
        """
        for spelling in self.spellings:
            if token.startswith(prefix := spelling + "="):
                return token[len(prefix):], 1

        if self.spells(token):
            if not following:
                return None
            return following[0], 2

        return None


__all__ = (
    "Argument",
    "Flag",
    "Option",
)
