"""Bidirectional mapping between compact wire tokens and domain enums."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Generic, Mapping, Optional, Type, TypeVar

from .enums import Completeness, Condition, ItemType, PartOutItemType, PriceGuideType
from .errors import DecodeError

E = TypeVar("E", bound=Enum)


class EnumCodec(Generic[E]):
    """Decode wire tokens into members of ``enum_cls`` and back.

    ``tokens`` maps every wire token to a member. The table must cover each
    member exactly once so that ``decode(encode(member)) is member``. When
    ``default`` is given, unknown tokens decode to it instead of raising.
    """

    def __init__(self, enum_cls: Type[E], tokens: Mapping[str, E], default: Optional[E] = None) -> None:
        reverse: Dict[E, str] = {}
        for token, member in tokens.items():
            if member in reverse:
                raise ValueError(f"{enum_cls.__name__}.{member.name} is mapped to more than one token")
            reverse[member] = token
        unmapped = [member.name for member in enum_cls if member not in reverse]
        if unmapped:
            raise ValueError(f"{enum_cls.__name__} has no token for: {', '.join(unmapped)}")
        self.enum_cls = enum_cls
        self.default = default
        self._decode = dict(tokens)
        self._encode = reverse

    def decode(self, token: object, field: Optional[str] = None) -> E:
        member = self._decode.get(token) if isinstance(token, str) else None
        if member is not None:
            return member
        if self.default is not None:
            return self.default
        raise DecodeError(f"unknown {self.enum_cls.__name__} token {token!r}", field=field)

    def encode(self, member: E) -> str:
        try:
            return self._encode[member]
        except KeyError:
            raise ValueError(f"{member!r} is not a {self.enum_cls.__name__}") from None


# Unknown completeness letters fall back to COMPLETE rather than failing.
COMPLETENESS: EnumCodec[Completeness] = EnumCodec(
    Completeness,
    {"C": Completeness.COMPLETE, "B": Completeness.INCOMPLETE, "S": Completeness.SEALED},
    default=Completeness.COMPLETE,
)

CONDITION: EnumCodec[Condition] = EnumCodec(Condition, {"N": Condition.NEW, "U": Condition.USED})

ITEM_TYPE: EnumCodec[ItemType] = EnumCodec(ItemType, {member.name: member for member in ItemType})

PART_OUT_ITEM_TYPE: EnumCodec[PartOutItemType] = EnumCodec(
    PartOutItemType,
    {"S": PartOutItemType.SET, "M": PartOutItemType.MINIFIG, "G": PartOutItemType.GEAR},
)

PRICE_GUIDE_TYPE: EnumCodec[PriceGuideType] = EnumCodec(
    PriceGuideType, {member.value: member for member in PriceGuideType}
)
