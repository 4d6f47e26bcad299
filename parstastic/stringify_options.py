"""Rules that decide which whitespace is written when stringifying JSON."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Optional

from parstastic.whitespace import Whitespace, WhitespaceCharacter

DEFAULT_INDENTATION = "    "


class Container(Enum):
    """The kind of container a value is being written in."""

    NONE = "none"
    ARRAY_NODE = "array"
    OBJECT_NODE = "object"


# A rule yields replacement whitespace; a missing rule keeps what was parsed.
_Rule = Callable[["StringifyOptions"], Optional[Whitespace]]


def _empty(options: "StringifyOptions") -> Optional[Whitespace]:
    return Whitespace()


def _one_space(options: "StringifyOptions") -> Optional[Whitespace]:
    return Whitespace([WhitespaceCharacter.SPACE])


def _line_break_and_indentation(options: "StringifyOptions") -> Optional[Whitespace]:
    return Whitespace.from_string("\n" + DEFAULT_INDENTATION * options.indentation_level)


def _line_break_and_reduced_indentation(options: "StringifyOptions") -> Optional[Whitespace]:
    level = max(options.indentation_level - 1, 0)
    return Whitespace.from_string("\n" + DEFAULT_INDENTATION * level)


@dataclass(frozen=True)
class _ContainerRules:
    whitespace: Optional[_Rule] = None
    value_leading: Optional[_Rule] = None
    value_trailing: Optional[_Rule] = None
    last_value_trailing: Optional[_Rule] = None
    property_leading: Optional[_Rule] = None
    property_trailing: Optional[_Rule] = None


_MINIMAL_CONTAINER = _ContainerRules(
    whitespace=_empty,
    value_leading=_empty,
    value_trailing=_empty,
    last_value_trailing=_empty,
    property_leading=_empty,
    property_trailing=_empty,
)


@dataclass(frozen=True)
class _Profile:
    value_leading: Optional[_Rule] = None
    value_trailing: Optional[_Rule] = None
    array: _ContainerRules = field(default_factory=_ContainerRules)
    object: _ContainerRules = field(default_factory=_ContainerRules)


_DEFAULT_PROFILE = _Profile()

_MINIMAL_PROFILE = _Profile(
    value_leading=_empty,
    value_trailing=_empty,
    array=_MINIMAL_CONTAINER,
    object=_MINIMAL_CONTAINER,
)

_PRETTY_PROFILE = _Profile(
    value_leading=_empty,
    value_trailing=_empty,
    array=_ContainerRules(
        whitespace=_empty,
        value_leading=_line_break_and_indentation,
        value_trailing=_empty,
        last_value_trailing=_line_break_and_reduced_indentation,
    ),
    object=_ContainerRules(
        whitespace=_empty,
        value_leading=_one_space,
        value_trailing=_empty,
        last_value_trailing=_line_break_and_reduced_indentation,
        property_leading=_line_break_and_indentation,
        property_trailing=_empty,
    ),
)


@dataclass(frozen=True)
class StringifyOptions:
    """Whitespace choices for one position in the document being written."""

    container: Container = Container.NONE
    is_last_element: bool = False
    indentation_level: int = 0
    _profile: _Profile = field(default=_DEFAULT_PROFILE, repr=False)

    @classmethod
    def default(cls) -> "StringifyOptions":
        """Keep all whitespace exactly as it was parsed."""
        return cls(_profile=_DEFAULT_PROFILE)

    @classmethod
    def pretty(cls) -> "StringifyOptions":
        """Line breaks and four-space indentation."""
        return cls(_profile=_PRETTY_PROFILE)

    @classmethod
    def minimal(cls) -> "StringifyOptions":
        """Drop all insignificant whitespace."""
        return cls(_profile=_MINIMAL_PROFILE)

    def for_container_node(self, container: Container) -> "StringifyOptions":
        """Options for the contents of a container one level deeper."""
        return self._for_container(container, False)

    def for_container_node_last_element(self, container: Container) -> "StringifyOptions":
        """Options for the last element of a container one level deeper."""
        return self._for_container(container, True)

    def _for_container(self, container: Container, is_last_element: bool) -> "StringifyOptions":
        return replace(
            self,
            container=container,
            is_last_element=is_last_element,
            indentation_level=self.indentation_level + 1,
        )

    def _apply(self, rule: Optional[_Rule], whitespace: Whitespace) -> Whitespace:
        if rule is None:
            return whitespace
        chosen = rule(self)
        return whitespace if chosen is None else chosen

    def _container_rules(self) -> Optional[_ContainerRules]:
        if self.container is Container.ARRAY_NODE:
            return self._profile.array
        if self.container is Container.OBJECT_NODE:
            return self._profile.object
        return None

    def container_node_whitespace(self, whitespace: Whitespace) -> Whitespace:
        """Whitespace inside an empty container."""
        rules = self._container_rules()
        return self._apply(rules.whitespace if rules else None, whitespace)

    def json_value_leading_whitespace(self, whitespace: Whitespace) -> Whitespace:
        """Whitespace before a value."""
        rules = self._container_rules()
        rule = rules.value_leading if rules else self._profile.value_leading
        return self._apply(rule, whitespace)

    def json_value_trailing_whitespace(self, whitespace: Whitespace) -> Whitespace:
        """Whitespace after a value."""
        rules = self._container_rules()
        if rules is None:
            rule = self._profile.value_trailing
        elif self.is_last_element:
            rule = rules.last_value_trailing
        else:
            rule = rules.value_trailing
        return self._apply(rule, whitespace)

    def object_node_property_leading_whitespace(self, whitespace: Whitespace) -> Whitespace:
        """Whitespace before an object key."""
        return self._apply(self._profile.object.property_leading, whitespace)

    def object_node_property_trailing_whitespace(self, whitespace: Whitespace) -> Whitespace:
        """Whitespace between an object key and its colon."""
        return self._apply(self._profile.object.property_trailing, whitespace)