"""Configuration source reading command-line arguments."""

from __future__ import annotations

import logging
import re
import sys
from typing import Any, Dict, List, Optional, Sequence

from ..core.keys import expand_namespaced
from ..core.types import ConfigDict, Options

logger = logging.getLogger(__name__)

POSITIONAL_KEY = "_"

_INT_RE = re.compile(r"^[-+]?\d+$")
_FLOAT_RE = re.compile(r"^[-+]?(\d+\.\d*|\.\d+|\d+)([eE][-+]?\d+)?$")


def _is_number(token: str) -> bool:
    return bool(_FLOAT_RE.match(token))


def coerce(token: str) -> Any:
    """Convert numeric-looking tokens to ``int``/``float``."""
    if _INT_RE.match(token):
        return int(token)
    if _FLOAT_RE.match(token):
        return float(token)
    return token


def _coerce_value(token: str) -> Any:
    if token == "true":
        return True
    if token == "false":
        return False
    return coerce(token)


def _takes_value(token: Optional[str]) -> bool:
    if token is None:
        return False
    return not token.startswith("-") or _is_number(token)


def parse_argv(args: Sequence[str]) -> Dict[str, Any]:
    """Parse arguments into a flat mapping using minimist conventions.

    - ``--key=value`` and ``--key value`` set ``key``; a bare ``--flag`` is
      ``True`` and ``--no-flag`` is ``False``. Only the separate-token form
      turns ``true``/``false`` into booleans.
    - ``-abc`` sets ``a``, ``b`` and ``c`` to ``True``; ``-k value`` binds
      the value to the last letter and ``-n5`` binds ``5`` to ``n``.
    - Everything after ``--`` and every non-flag token is collected in
      order under ``"_"``.
    - Numeric values become numbers; a key given twice becomes a list.
    """
    parsed: Dict[str, Any] = {POSITIONAL_KEY: []}

    def set_arg(key: str, value: Any) -> None:
        if key not in parsed:
            parsed[key] = value
        elif isinstance(parsed[key], list):
            parsed[key].append(value)
        else:
            parsed[key] = [parsed[key], value]

    i = 0
    while i < len(args):
        arg = args[i]
        nxt = args[i + 1] if i + 1 < len(args) else None

        if arg == "--":
            parsed[POSITIONAL_KEY].extend(coerce(a) for a in args[i + 1 :])
            break

        if arg.startswith("--"):
            body = arg[2:]
            if "=" in body:
                key, value = body.split("=", 1)
                set_arg(key, coerce(value))
            elif body.startswith("no-"):
                set_arg(body[3:], False)
            elif _takes_value(nxt):
                set_arg(body, _coerce_value(nxt))
                i += 1
            else:
                set_arg(body, True)
        elif arg.startswith("-") and len(arg) > 1 and not _is_number(arg):
            body = arg[1:]
            inline: Optional[str] = None
            if "=" in body:
                body, inline = body.split("=", 1)
            for j, letter in enumerate(body[:-1]):
                rest = body[j + 1 :]
                if inline is None and _is_number(rest):
                    # -n5
                    set_arg(letter, coerce(rest))
                    break
                set_arg(letter, True)
            else:
                last = body[-1:]
                if last and inline is not None:
                    set_arg(last, coerce(inline))
                elif last and _takes_value(nxt):
                    set_arg(last, _coerce_value(nxt))
                    i += 1
                elif last:
                    set_arg(last, True)
        else:
            parsed[POSITIONAL_KEY].append(coerce(arg))
        i += 1

    return parsed


class ArgvSource:
    """Expose command-line arguments as configuration.

    ``--db.host=localhost`` contributes ``{"db": {"host": "localhost"}}``.
    """

    name = "argv"

    def __init__(self, argv: Optional[Sequence[str]] = None):
        """Initialize ArgvSource.

        Args:
            argv: Arguments to parse instead of ``sys.argv[1:]``.
        """
        self._argv = argv

    def arguments(self) -> List[str]:
        if self._argv is None:
            return list(sys.argv[1:])
        return list(self._argv)

    def load(self, options: Options) -> ConfigDict:
        args = self.arguments()
        logger.debug("Parsing %d command-line arguments", len(args))
        return expand_namespaced(parse_argv(args))
