"""The process-wide builtin table.

Built once at import time and read-only afterwards. `Environment.get` consults
it before any user binding, so these names cannot be redefined from Wisp code.
"""

from types import MappingProxyType
from typing import Mapping

from wisp import LispValue
from wisp.builtin.env_builtin import CORE_BUILTINS
from wisp.builtin.io_builtin import IO_BUILTINS
from wisp.evaluation.special_forms import SPECIAL_FORMS
from wisp.types.builtin import Builtin

CONSTANTS: dict[str, LispValue] = {
    "endl": "\n",
}


def _build_table() -> Mapping[str, LispValue]:
    table: dict[str, LispValue] = {}
    for name, fn in SPECIAL_FORMS.items():
        table[name] = Builtin(name, fn, special=True)
    for name, fn in {**CORE_BUILTINS, **IO_BUILTINS}.items():
        table[name] = Builtin(name, fn)
    table.update(CONSTANTS)
    return MappingProxyType(table)


BUILTINS: Mapping[str, LispValue] = _build_table()


def builtin_names() -> list[str]:
    """Every reserved name, sorted."""
    return sorted(BUILTINS)
