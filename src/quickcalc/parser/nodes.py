"""Expression and conversion tree produced by the grammar."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..units.dimensions import Quantity
from ..units.formatting import superscript
from ..units.registry import UnitDef


class BinaryOperator(Enum):
    PLUS = "+"
    MINUS = "-"
    MULT = "*"
    IMPLICIT_MULT = ""
    DIV = "/"
    POW = "^"


@dataclass(frozen=True)
class NumberLiteral:
    quantity: Quantity
    label: str

    def render(self) -> str:
        return self.label


@dataclass(frozen=True)
class Bracket:
    inner: "Node"

    def render(self) -> str:
        return f"({self.inner.render()})"


@dataclass(frozen=True)
class Negate:
    operand: "Node"

    def render(self) -> str:
        return f"-{self.operand.render()}"


@dataclass(frozen=True)
class BinaryOp:
    op: BinaryOperator
    left: "Node"
    right: "Node"

    def render(self) -> str:
        left, right = self.left.render(), self.right.render()
        if self.op is BinaryOperator.IMPLICIT_MULT:
            return f"{left} {right}"
        if self.op is BinaryOperator.POW:
            if isinstance(self.right, NumberLiteral) and self.right.label.isdigit():
                return f"{left}{superscript(int(self.right.label))}"
            return f"{left}^{right}"
        if self.op in (BinaryOperator.PLUS, BinaryOperator.MINUS):
            return f"{left} {self.op.value} {right}"
        return f"{left}{self.op.value}{right}"


Node = Union[NumberLiteral, Bracket, Negate, BinaryOp]


@dataclass(frozen=True)
class Calculation:
    expression: Node

    def render(self) -> str:
        return self.expression.render()


@dataclass(frozen=True)
class PrimitiveConversion:
    expression: Node
    unit: UnitDef

    def render(self) -> str:
        return f"{self.expression.render()} as {self.unit.abbreviation}"


@dataclass(frozen=True)
class ComplexConversion:
    expression: Node
    target: Node

    def render(self) -> str:
        return f"{self.expression.render()} as {self.target.render()}"


Conversion = Union[Calculation, PrimitiveConversion, ComplexConversion]

__all__ = [
    "BinaryOperator",
    "BinaryOp",
    "Bracket",
    "Negate",
    "NumberLiteral",
    "Node",
    "Calculation",
    "PrimitiveConversion",
    "ComplexConversion",
    "Conversion",
]
