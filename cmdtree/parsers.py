"""
cmdtree parser layer: declare, parse, and dispatch command trees.

What this module provides
- Parser: one level of a command tree (the program itself or a subcommand).
  • Fluent declarations: flag(), option(), positional() and action() return the
    same parser; command() returns the newly created child.
  • parse(): a single forward pass over raw tokens producing a Result.
  • run(): parse, then dispatch the Result to the handler of the reached command,
    or render its usage when that command has no handler.
  • collect_flags()/collect_options(): the inherited view used by usage rendering.

- invoke(parser, prompt): the command-line entry helper. It renders faults through
  rich and turns the outcome into an exit status, without ever exiting itself.

Core ideas
- Routing first: a token equal to a child name always descends into that child,
  whatever it looks like.
- Node-local matching: only the reached command's own flags and options are
  recognized. Ancestors' declarations show up in usage output, not in parsing.
- No values are converted or validated: flags are booleans, options are strings,
  and declared choices are informational.

Quick start
    from cmdtree import Parser, invoke

    docker = Parser("docker", "container tooling")
    docker.option("config", "c", "path to the client config")
    docker.command("run", "run a container") \\
        .flag("detach", "d", "run in background") \\
        .option("name", "", "assign a name") \\
        .positional("image") \\
        .action(lambda result: print(result.positionals))

    invoke(docker, "run -d --name=web nginx")
"""
import functools
import logging
import shlex
from collections import defaultdict
from collections.abc import Iterable

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from . import faults
from .arguments import Flag, Option
from .faults import *
from .results import Result
from .utils import *

logger = logging.getLogger(__name__)


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return (
            "first", "second", "third", "fourth", "fifth",
            "sixth", "seventh", "eighth", "ninth", "tenth",
        )[number - 1]
    except IndexError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _strings(iterable, caller):
    tokens = list(iterable)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError(f"{caller}() argument must be an iterable of strings")
    return tokens


class Parser(metaclass=IntrospectableType):
    """
    One node of a command tree.

    Responsibilities
    - Declaration: owns its flags, options, positional labels, children and handler.
      Re-declaring a name silently replaces the previous declaration.
    - Routing: parse()/run() walk from this node down through children.
    - Rendering: usage() shows the node's usage line, commands, and the flags and
      options collected from the node and all of its ancestors.

    Runtime settings
    - colorful: style rich output (palette overridable via __main__.__styles__).
    - fancy: wrap rendered faults in a panel.
    Both inherit from the parent when left Unset, and default to False at the root.

    Notes
    - parent is a plain back-reference; a node is owned by its parent's children
      mapping only.
    - Containers are exposed as read-only views.
    """
    __introspectable__ = (
        "name",
        "descr",
        "flags",
        "options",
        "children",
        "handler",
        "positionals",
        "colorful",
        "fancy",
    )

    __displayable__ = (
        "name",
        "descr",
        "flags",
        "options",
        "children",
        "positionals",
    )

    def __init__(self, name="", descr="", /, *, parent=Unset, colorful=Unset, fancy=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        if not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")
        if not isinstance(parent, Parser | Unset):
            raise TypeError(f"{type(self).__typename__} 'parent' must be a parser")

        self._name = name
        self._descr = descr
        self._flags = {}
        self._options = {}
        self._children = {}
        self._parent = coalesce(parent)
        self._handler = None
        self._positionals = []
        self._colorful = bool(coalesce(colorful, getattr(self._parent, "colorful", False)))
        self._fancy = bool(coalesce(fancy, getattr(self._parent, "fancy", False)))

        if self._parent is not None:
            self._parent._children[name] = self

    @property
    def parent(self):
        return self._parent

    @property
    def root(self):
        """
        Return the topmost parser of this tree.
        """
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the full ancestry from root to this parser as a tuple.
        """
        path = [parser := self]
        while parser.parent:
            path.append(parser := parser.parent)
        return tuple(reversed(path))

    @property
    def route(self):
        """
        Return the command line that reaches this parser, e.g. "docker run".

        Empty names (a synthetic root) are skipped; when nothing is left, the
        host's __main__.__prog__ is used, falling back to "program".
        """
        return " ".join(step.name for step in self.path if step.name) or getattr(
            __import__("__main__"), "__prog__", "program"
        )

    def flag(self, name, short="", descr="", /):
        """
        Declare a presence-only flag and return this parser.
        """
        flag = Flag(name, short, descr)
        self._flags[flag.name] = flag
        return self

    def option(self, name, short="", descr="", /, *choices):
        """
        Declare a value-bearing option and return this parser.

        choices are shown in usage output but never checked while parsing.
        """
        option = Option(name, short, descr, *choices)
        self._options[option.name] = option
        return self

    def command(self, name, descr="", /):
        """
        Declare a subcommand and return the NEW child parser.

        An existing child with the same name is replaced. The child inherits the
        colorful/fancy settings of this parser.
        """
        return type(self)(name, descr, parent=self)

    def positional(self, name, /):
        """
        Append a positional label (usage output only) and return this parser.
        """
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} positional name must be a string")
        self._positionals.append(name)
        return self

    def action(self, handler, /):
        """
        Set the handler called with the Result when parsing stops at this parser.
        """
        if not callable(handler):
            raise TypeError(f"{type(self).__typename__} handler must be callable")
        self._handler = handler
        return self

    def _collect(self, field):
        # closer declarations shadow ancestors'; order is first-seen walking upward
        seen = {}
        for parser in reversed(self.path):
            for name, argument in getattr(parser, field).items():
                seen.setdefault(name, argument)
        return tuple(seen.values())

    def collect_flags(self):
        """
        Return the flags visible from this parser: its own, then each ancestor's
        new names, nearest first.
        """
        return self._collect("_flags")

    def collect_options(self):
        """
        Return the options visible from this parser, with the same shadowing
        rules as collect_flags().
        """
        return self._collect("_options")

    def _parse_flag(self, token, flags):
        for flag in self._flags.values():
            if flag.spells(token):
                flags[flag.name] = True
                return 1
        return 0

    def _parse_option(self, token, following, options):
        for option in self._options.values():
            if (captured := option.capture(token, following)) is not None:
                options[option.name], consumed = captured
                return consumed
            if option.spells(token):
                return 0  # spaced form with nothing left to take as its value
        return 0

    def _unknown(self, token, index):
        """
        Build the fault for a dash-prefixed token nothing recognized at this parser.
        """
        hint = "'%s' declares no flags or options" % self.route
        for option in self._options.values():
            if option.spells(token):
                hint = "option %r needs a value (for example: %s <value> or %s=<value>)" % (token, token, token)
                break
        else:
            spellings = [
                spelling
                for argument in (*self._flags.values(), *self._options.values())
                for spelling in argument.spellings
            ]
            if spellings:
                hint = "'%s' accepts %s" % (self.route, ", ".join(spellings))

        return UnknownFlagError(
            "unknown flag %r at %s position" % (token, _ordinal(index + 1)),
            title="unknown flag",
            code=FaultCode.UNKNOWN_FLAG,
            token=token,
            index=index,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_FLAG),
            tool=self,
            colorful=self.colorful,
            fancy=self.fancy,
        )

    def parse(self, tokens, /):
        """
        Resolve raw tokens against this tree in a single forward pass.

        Per position, in order
        1. a token equal to a child name of the current parser descends into it;
        2. a token starting with '-' must spell a flag, or else an option, of the
           current parser (UnknownFlagError otherwise);
        3. anything else is kept verbatim as a positional.

        An option spelled without '=' takes the next token as its value; when
        there is no next token the option is not recognized and the token is
        reported as an unknown flag.

        Raises
        - EmptyInputError: tokens is empty.
        - UnknownFlagError: see above; no partial result is produced.
        - TypeError: tokens holds a non-string item.
        """
        tokens = _strings(tokens, "parse")

        if not tokens:
            raise EmptyInputError(
                "no arguments provided",
                title="empty input",
                code=FaultCode.EMPTY_INPUT,
                hint="pass at least one argument to '%s'" % self.route,
                docs=getdoc(FaultCode.EMPTY_INPUT),
                tool=self,
                colorful=self.colorful,
                fancy=self.fancy,
            )

        command = []
        flags = {}
        options = {}
        positionals = []

        current = self
        index = 0
        while index < len(tokens):
            token = tokens[index]

            if token in current._children:
                command.append(token)
                current = current._children[token]
                logger.debug("routed to %r at %s position", current.route, _ordinal(index + 1))
                index += 1
                continue

            if token.startswith("-"):
                consumed = (
                    current._parse_flag(token, flags) or
                    current._parse_option(token, tokens[index + 1:index + 2], options)
                )
                if not consumed:
                    raise current._unknown(token, index)
                index += consumed
                continue

            positionals.append(token)
            index += 1

        return Result(command, flags, options, positionals)

    def run(self, tokens, /, *, console=Unset):
        """
        Parse tokens and dispatch the Result.

        The reached parser is found again by following result.command from here.
        Its handler is called with the Result and its return value is returned;
        exceptions from parse() or from the handler propagate unchanged. Without a
        handler, the reached parser's usage is rendered to console and None is
        returned.
        """
        result = self.parse(tokens)

        current = self
        for name in result.command:
            current = current._children[name]

        if current.handler is not None:
            logger.debug("dispatching to %r", current.route)
            return current.handler(result)

        logger.debug("no handler at %r, showing usage", current.route)
        current.usage(console=console)
        return None

    def _palette(self):
        styles = defaultdict(str, {
            # === Head sections ===
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "description-section": "italic #A3A3A3",  # Neutral gray

            # === Groups / arguments ===
            "group-label": "bold #FFFFFF",
            "argument-description": "#9CA3AF",
            "option-name": "bold #00E6FF",
            "flag-name": "bold #22C55E",
            "metavar": "bold #FFD600",
            "choice": "bold #FF4D94",

            # === Children table ===
            "children-title": "bold #FFFFFF",
            "children-table": "#4B5563",
            "children": "bold #36C5F0",
            "children-description": "#9CA3AF",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        return styler

    def _render(self, width):
        """
        Build the usage renderable (a rich Group) for this parser.
        """
        styler = self._palette()
        renders = []

        usage = Text()
        usage.append("usage", styler("usage-label")).append(":").append(" ")
        usage.append(self.route, styler("program-name"))
        if self.children:
            usage.append(" ").append("<command>", styler("usage-section"))
        if self.flags or self.options:
            usage.append(" ").append("[options]", styler("usage-section"))
        for name in self.positionals:
            usage.append(" ").append(f"<{name}>", styler("metavar"))
        renders.append(usage)

        if self.descr:
            renders.append(Text("\n").append(self.descr, styler("description-section")))

        if self.children:
            table = Table(
                "name", "help",
                title=Text("subcommands" if self.parent else "commands", styler("children-title")),
                width=int(width * (2 / 3)),
                box=ROUNDED,
                style=styler("children-table"),
                header_style=styler("children-title"),
            )
            for name, child in self.children.items():
                table.add_row(
                    Text(name, styler("children")),
                    Text(child.descr or "-", styler("children-description")),
                )
            renders.append(Text(""))
            renders.append(table)

        indent = 24  # description column

        def section(label, arguments, style):
            lines = Text("\n").append(label, styler("group-label")).append(":")
            for argument in arguments:
                line = Text("  ")
                if argument.short:
                    line.append("-" + argument.short, styler(style)).append(", ")
                line.append("--" + argument.name, styler(style))
                if isinstance(argument, Option):
                    line.append(" ").append("<value>", styler("metavar"))
                    if argument.choices:
                        line.append(" {").append("|".join(argument.choices), styler("choice")).append("}")
                if len(line) + 1 > indent:
                    line.append("\n").append(" " * indent)
                else:
                    line.append(" " * (indent - len(line)))
                line.append(argument.descr or "-", styler("argument-description"))
                lines.append("\n").append(line)
            return lines

        if flags := self.collect_flags():
            renders.append(section("flags", flags, "flag-name"))

        if options := self.collect_options():
            renders.append(section("options", options, "option-name"))

        return Group(*renders)

    def usage(self, *, console=Unset):
        """
        Render usage for this parser through rich.

        Layout
        - usage line: route, <command> when there are children, [options] when
          flags or options are declared here, then <label> per positional label.
        - description, a commands table, then inherited flags and options
          (see collect_flags()/collect_options()), with choices as {a|b}.
        """
        console = coalesce(console, Console())
        console.print(self._render(console.width))


def invoke(parser, prompt, /, *, stdout=Unset, stderr=Unset):
    """
    Command-line entry helper: run a parser and turn the outcome into an exit status.

    Parameters
    - parser: Parser, the root of the tree to run.
    - prompt:
      • str: shell-like string; split via shlex.split.
      • Iterable[str]: pre-tokenized arguments (for example sys.argv[1:]).
    - stdout: rich Console for usage output (default: a new stdout console).
    - stderr: rich Console for faults (default: cmdtree.faults.console).

    Returns
    - 1 when a CommandException was raised (it is rendered to stderr first).
    - the handler's return value when it is an int, 0 otherwise.

    Raises
    - TypeError: parser is not a Parser, or prompt is not str/Iterable[str].
    - anything the handler raises other than CommandException.
    """
    if not isinstance(parser, Parser):
        raise TypeError("invoke() first argument must be a parser")

    if isinstance(prompt, str):
        tokens = shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = _strings(prompt, "invoke")
    else:
        raise TypeError("invoke() second argument must be a string or an iterable of strings")

    try:
        status = parser.run(tokens, console=stdout)
    except CommandException as exception:
        coalesce(stderr, faults.console).print(exception)
        return 1

    if isinstance(status, int) and not isinstance(status, bool):
        return status
    return 0


__all__ = (
    "Parser",
    "invoke",
)
