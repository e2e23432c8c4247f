"""Immutable carriers for fixed-size compound values."""

from __future__ import annotations

from typing import NamedTuple


class Vector(NamedTuple):
    x: float
    y: float
    z: float


class SphericalTensor(NamedTuple):
    ii: float


class SymmTensor(NamedTuple):
    """Symmetric rank-2 tensor, upper triangle in row order."""

    xx: float
    xy: float
    xz: float
    yy: float
    yz: float
    zz: float


class Tensor(NamedTuple):
    xx: float
    xy: float
    xz: float
    yx: float
    yy: float
    yz: float
    zx: float
    zy: float
    zz: float
