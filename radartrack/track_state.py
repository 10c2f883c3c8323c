"""Estimated kinematic state of a tracked target."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import Sequence

from radartrack.enums import MotionModel


@dataclass
class TrackState:
    """Position, velocity, acceleration and uncertainty of a target."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0
    ax: float = 0.0
    ay: float = 0.0
    az: float = 0.0
    omega: float = 0.0
    sigma_x: float = 0.0
    sigma_y: float = 0.0
    sigma_z: float = 0.0
    sigma_vx: float = 0.0
    sigma_vy: float = 0.0
    sigma_vz: float = 0.0
    covariance: list[float] = field(default_factory=list)
    dimension: int = 6
    timestamp: int = 0
    motion_model: MotionModel = MotionModel.CV
    model_probabilities: list[float] = field(default_factory=list)

    def speed(self) -> float:
        return math.sqrt(self.vx**2 + self.vy**2 + self.vz**2)

    def speed_2d(self) -> float:
        return math.sqrt(self.vx**2 + self.vy**2)

    def heading(self) -> float:
        """Heading in radians measured from the X axis."""
        return math.atan2(self.vy, self.vx)

    def climb_angle(self) -> float:
        horizontal = self.speed_2d()
        return math.atan2(self.vz, horizontal) if horizontal > 0.001 else 0.0

    def range(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def azimuth(self) -> float:
        return math.atan2(self.y, self.x)

    def elevation(self) -> float:
        distance = self.range()
        return math.asin(self.z / distance) if distance > 0.001 else 0.0

    def position(self) -> list[float]:
        return [self.x, self.y, self.z]

    def velocity(self) -> list[float]:
        return [self.vx, self.vy, self.vz]

    def state_vector(self) -> list[float]:
        """State vector laid out for the current motion model."""
        base = [self.x, self.y, self.z, self.vx, self.vy, self.vz]
        if self.motion_model is MotionModel.CA:
            return base + [self.ax, self.ay, self.az]
        if self.motion_model is MotionModel.CT:
            return base + [self.omega]
        return base

    def set_from_vector(self, state: Sequence[float], model: MotionModel) -> None:
        self.motion_model = model
        if len(state) >= 6:
            self.x, self.y, self.z, self.vx, self.vy, self.vz = state[:6]
        if model is MotionModel.CA and len(state) >= 9:
            self.ax, self.ay, self.az = state[6:9]
            self.dimension = 9
        elif model is MotionModel.CT and len(state) >= 7:
            self.omega = state[6]
            self.dimension = 7
        else:
            self.dimension = 6

    def position_uncertainty(self) -> float:
        return math.sqrt(self.sigma_x**2 + self.sigma_y**2 + self.sigma_z**2)

    def extrapolate(self, dt: float) -> TrackState:
        """Return a copy of this state propagated forward by dt seconds."""
        out = copy.deepcopy(self)
        vx, vy, vz = self.vx, self.vy, self.vz

        if self.motion_model is MotionModel.CA:
            half_dt2 = 0.5 * dt * dt
            out.x += vx * dt + self.ax * half_dt2
            out.y += vy * dt + self.ay * half_dt2
            out.z += vz * dt + self.az * half_dt2
            out.vx += self.ax * dt
            out.vy += self.ay * dt
            out.vz += self.az * dt
        elif self.motion_model is MotionModel.CT:
            omega = self.omega
            if abs(omega) < 1e-6:
                out.x += vx * dt
                out.y += vy * dt
            else:
                s = math.sin(omega * dt)
                c = math.cos(omega * dt)
                one_minus_c = 1.0 - c
                out.x += (vx * s + vy * one_minus_c) / omega
                out.y += (-vx * one_minus_c + vy * s) / omega
                out.vx = vx * c + vy * s
                out.vy = -vx * s + vy * c
            out.z += vz * dt
        else:
            out.x += vx * dt
            out.y += vy * dt
            out.z += vz * dt
        return out