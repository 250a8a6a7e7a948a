"""
cmdtree faults and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for user-facing errors.
- CommandException: base type carrying a message plus read-only options, able to
  render itself through rich in a friendly, lowercased and actionable way.
- EmptyInputError / UnknownFlagError: the only two ways a parse can fail.
- getdoc(): optional description lookup for a code from the host application.

Integration
- The parser raises these exceptions and never prints them. Callers (see
  cmdtree.parsers.invoke) decide whether to render them and which exit status
  to use.
- Rendering honors the options attached at raise time (colorful, fancy, tool)
  and the host overrides __styles__, __codes__, __docs__ and __prog__ in __main__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - input (1110x)
      • EMPTY_INPUT
    - switches (1111x)
      • UNKNOWN_FLAG

    normalize() allows the host to remap codes to custom labels while the
    numeric values stay stable.
    """
    # --- input errors (11xxx) ---
    EMPTY_INPUT                 = 11100

    # --- switch errors (11xxx) ---
    UNKNOWN_FLAG                = 11112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        tool = self.options.get("tool")
        prog = text(getattr(main, "__prog__", tool.root.name if tool else ""), "prog-name")

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "", "code"),
            " | ",
            text(self.options.get("title", "").title(), "error-title"),
            " ]"
        )
        message = text(self.message or "", "error-message")
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        if docs := self.options.get("docs"):
            renders.append(text(docs, "hint"))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)


class EmptyInputError(CommandException): ...


class UnknownFlagError(CommandException):
    @property
    def token(self):
        """
        the dash-prefixed token that no flag or option recognized.
        """
        return self.options.get("token")


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "CommandException",
    "EmptyInputError",
    "UnknownFlagError",
    "getdoc",
)
