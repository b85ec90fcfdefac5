"""Session endpoints: the live two-map comparison, single session per process."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from app.api.routes_mirror import validated_ring
from app.config import settings
from app.core.session.driver import Overlay, RecomputeDriver
from app.models.schemas import (
    AngleRequest,
    Coordinate,
    OverlayResponse,
    SessionResponse,
    SourceRequest,
)
from app.models.shape_model import ring_to_feature

logger = logging.getLogger(__name__)

router = APIRouter(tags=["session"])


def new_driver() -> RecomputeDriver:
    return RecomputeDriver(
        target=settings.default_target_center,
        frame_interval=settings.frame_interval_s,
        identity_epsilon=settings.identity_epsilon_deg,
    )


# Desktop-only: one driver per process (one source shape at a time).
_driver = new_driver()


def get_driver() -> RecomputeDriver:
    return _driver


def reset_session() -> None:
    global _driver
    _driver = new_driver()


def _session_state() -> dict:
    return {
        "has_source": _driver.source is not None,
        "angle": _driver.angle,
        "target": list(_driver.target),
        "epoch": _driver.epoch,
    }


def _overlay_body(overlay: Overlay) -> dict:
    return {
        "epoch": overlay.epoch,
        "rotated": ring_to_feature(overlay.rotated, angle=overlay.angle),
        "mirrored": ring_to_feature(
            overlay.mirrored, angle=overlay.angle, target=list(overlay.target),
        ),
    }


@router.get("/session", response_model=SessionResponse)
async def session_status():
    return _session_state()


@router.post("/session/draw-start", response_model=SessionResponse)
async def draw_start():
    """A new drawing began on the source map: drop the current shape."""
    _driver.clear_source()
    return _session_state()


@router.put("/session/source", response_model=SessionResponse)
async def set_source(req: SourceRequest):
    checked = validated_ring(req.source)
    _driver.set_source(checked.ring)
    logger.info("New source shape with %d vertices", len(checked.ring))
    return _session_state()


@router.put("/session/angle", response_model=SessionResponse)
async def set_angle(req: AngleRequest):
    _driver.set_angle(req.angle)
    return _session_state()


@router.post("/session/angle/reset", response_model=SessionResponse)
async def reset_angle():
    _driver.reset_angle()
    return _session_state()


@router.put("/session/target", response_model=SessionResponse)
async def set_target(req: Coordinate):
    """The target map settled on a new center."""
    _driver.set_target(req.as_tuple())
    return _session_state()


@router.get("/session/overlays", response_model=OverlayResponse)
async def overlays():
    return _overlay_body(_driver.snapshot())
