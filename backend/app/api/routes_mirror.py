"""Mirror endpoints: stateless rotate, project and the combined mirror call."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from app.config import settings
from app.core.geometry.mirror import mirror, offsets, project
from app.core.geometry.rotation import rotate
from app.core.geometry.spherical import DegenerateInputError, centroid
from app.core.geometry.validation import RingValidationResult
from app.models.schemas import (
    MirrorRequest,
    MirrorResponse,
    OffsetsRequest,
    OffsetsResponse,
    ProjectRequest,
    RotateRequest,
    Shape,
    ShapeResponse,
)
from app.models.shape_model import ring_to_feature, shape_to_ring
from app.utils.units import from_meters

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mirror"])


def validated_ring(shape: Shape) -> RingValidationResult:
    """Validate a request shape, raising 422 with every error found."""
    result = shape_to_ring(shape)
    if not result.valid:
        logger.info("Rejected shape: %s", ", ".join(e.code for e in result.errors))
        raise HTTPException(422, detail=[
            {"code": e.code, "message": e.message}
            for e in result.errors
        ])
    return result


def _degenerate(e: DegenerateInputError) -> HTTPException:
    return HTTPException(422, detail=[{"code": "DEGENERATE_RING", "message": str(e)}])


@router.get("/defaults")
async def defaults():
    """View centers the two maps open on and the rotation control bounds."""
    return {
        "source_center": list(settings.default_source_center),
        "target_center": list(settings.default_target_center),
        "angle": {"min": -180, "max": 180, "default": 0},
    }


@router.post("/rotate", response_model=ShapeResponse)
async def rotate_shape(req: RotateRequest):
    """Rotate a drawn shape about its centroid."""
    checked = validated_ring(req.source)
    try:
        rotated = rotate(checked.ring, req.angle, epsilon=settings.identity_epsilon_deg)
    except DegenerateInputError as e:
        raise _degenerate(e)
    return {
        "feature": ring_to_feature(rotated, angle=req.angle),
        "issues": [i.to_dict() for i in checked.issues],
    }


@router.post("/project", response_model=ShapeResponse)
async def project_shape(req: ProjectRequest):
    """Re-anchor a shape at a new center, keeping true ground size."""
    checked = validated_ring(req.source)
    mirrored = project(checked.ring, req.target.as_tuple())
    return {
        "feature": ring_to_feature(mirrored, target=list(req.target.as_tuple())),
        "issues": [i.to_dict() for i in checked.issues],
    }


@router.post("/mirror", response_model=MirrorResponse)
async def mirror_shape(req: MirrorRequest):
    """Rotate then project. A missing source yields an empty response."""
    if req.source is None:
        return MirrorResponse()

    checked = validated_ring(req.source)
    target = req.target.as_tuple()
    try:
        rotated = rotate(checked.ring, req.angle, epsilon=settings.identity_epsilon_deg)
        mirrored = mirror(
            checked.ring, req.angle, target, epsilon=settings.identity_epsilon_deg,
        )
    except DegenerateInputError as e:
        raise _degenerate(e)

    return {
        "rotated": ring_to_feature(rotated, angle=req.angle),
        "mirrored": ring_to_feature(mirrored, angle=req.angle, target=list(target)),
        "issues": [i.to_dict() for i in checked.issues],
    }


@router.post("/offsets", response_model=OffsetsResponse)
async def vertex_offsets(req: OffsetsRequest):
    """Ground distance and bearing of every vertex from the centroid."""
    checked = validated_ring(req.source)
    try:
        pivot = centroid(checked.ring)
    except DegenerateInputError as e:
        raise _degenerate(e)

    return {
        "centroid": list(pivot),
        "unit": req.unit,
        "offsets": [
            {
                "vertex": list(vertex),
                "distance": from_meters(off.distance_m, req.unit),
                "bearing": off.bearing_deg,
            }
            for vertex, off in zip(checked.ring, offsets(checked.ring, pivot))
        ],
    }
