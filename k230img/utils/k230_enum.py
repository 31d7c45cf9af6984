#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG enumeration with numeric tags, labels and descriptions.

Members are defined as ``NAME = (tag, label, description)`` and can be looked
up by the numeric tag stored in binary structures or by the label used on the
command line and in configuration files.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from typing_extensions import Self

from k230img.exceptions import K230KeyError


@dataclass(frozen=True)
class K230EnumMember:
    """K230IMG Enum member representation.

    Single member of a K230 enumeration: the numeric tag, human-readable label
    and optional description.
    """

    tag: int
    label: str
    description: Optional[str] = None


class K230Enum(K230EnumMember, Enum):
    """K230IMG enhanced enumeration.

    Members compare equal to their tag and to their label, and can be looked
    up by either of them.
    """

    def __eq__(self, __value: object) -> bool:
        """Check equality of enum value with another object.

        :param __value: Object to compare with this enum value.
        :return: True if the object equals tag or label, False otherwise.
        """
        return self.tag == __value or self.label == __value

    def __hash__(self) -> int:
        """Calculate hash value for the enum instance.

        :return: Hash value as integer.
        """
        return hash((self.tag, self.label, self.description))

    @classmethod
    def labels(cls) -> list[str]:
        """Get list of labels of all enum members.

        :return: List of all labels.
        """
        return [value.label for value in cls.__members__.values()]

    @classmethod
    def from_tag(cls, tag: int) -> Self:
        """Get enum member with given tag.

        :param tag: Tag to be used for searching
        :raises K230KeyError: If enum with given tag is not found
        :return: Found enum member
        """
        for item in cls.__members__.values():
            if item.tag == tag:
                return item
        raise K230KeyError(f"There is no {cls.__name__} item with tag {tag} defined")

    @classmethod
    def from_label(cls, label: str) -> Self:
        """Get enum member with given label (case-insensitive).

        :param label: Label to be used for searching
        :raises K230KeyError: If enum with given label is not found or label is not string
        :return: Found enum member
        """
        if not isinstance(label, str):
            raise K230KeyError("Label must be string")
        for item in cls.__members__.values():
            if item.label.upper() == label.upper():
                return item
        raise K230KeyError(f"There is no {cls.__name__} item with label {label} defined")
