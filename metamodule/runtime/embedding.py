"""Fold previously registered modules into a new declaration."""
from __future__ import annotations

from ..constants import IDENT_FIELDS
from ..errors import EmbedError, ResolutionError, ValidationError
from .classifier import ClassifiedDeclaration
from .copier import deep_copy
from .loader import load_module


def embed_modules(decl: ClassifiedDeclaration, *names: str) -> list[str]:
    """Merge the modules listed in ``names`` into ``decl`` in place.

    The declaration's own fields are never overwritten. Among the
    embedded modules, a later name overrides an earlier one. Returns the
    direct embed names in the order given.
    """

    embeds: list[str] = []
    state = {}
    behaviors = {}
    protocol = {}

    for name in names:
        if not isinstance(name, str):
            raise ValidationError(f"embedded module name must be string: {name!r}")
        if name in embeds:
            raise ValidationError(f"cannot embed module {name!r} twice")
        embeds.append(name)

        try:
            record = load_module(name)
        except (ResolutionError, ImportError) as exc:
            raise EmbedError(f"cannot embed module {name!r}: {exc}") from exc

        for key, value in record.state.items():
            if key in IDENT_FIELDS or key in decl.state:
                continue
            state[key] = deep_copy(value, f"{name}.{key}")

        for key, value in record.protocol.items():
            if key not in decl.protocol:
                protocol[key] = value

        for key, value in record.behaviors.items():
            if key not in decl.behaviors:
                behaviors[key] = value

    for staged, own in (
        (state, decl.state),
        (behaviors, decl.behaviors),
        (protocol, decl.protocol),
    ):
        for key, value in staged.items():
            own.setdefault(key, value)

    decl.embeds = embeds
    return embeds


__all__ = ["embed_modules"]
