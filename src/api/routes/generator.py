"""API routes for the Combination Generator."""

import io
import itertools
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from src import config
from src.generator import (
    AdmissionError,
    ExportNotAllowed,
    ListStore,
    PlanTier,
    build_export_file,
    check_limits,
    estimate_count,
    generate,
    get_tier_limits,
    iter_results,
    resolve_mode,
)
from src.models.generator import (
    GenerationNotice,
    GenerationResult,
    GeneratorCountRequest,
    GeneratorCountResponse,
    GeneratorExportRequest,
    GeneratorPreviewRequest,
    GeneratorPreviewResponse,
    GeneratorRequest,
    ListEntry,
    ListInput,
    TierInfo,
    TierLimits,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generator", tags=["generator"])


def _build_lists(inputs: List[ListInput]) -> List[ListEntry]:
    """Ingest request lists through a ListStore."""
    store = ListStore()
    for entry in inputs:
        if entry.raw_text is not None:
            store.add_list(entry.raw_text, entry.title)
        else:
            store.add_items(entry.items, entry.title)
    return list(store.entries())


def _resolve_limits(request: GeneratorRequest) -> TierLimits:
    """Explicit limits win over a tier name; the service default tier applies otherwise."""
    if request.limits is not None:
        return request.limits
    return get_tier_limits(request.tier or config.DEFAULT_TIER)


def _admission_error(exc: AdmissionError) -> HTTPException:
    logger.info("Generation rejected: %s", exc)
    return HTTPException(status_code=422, detail=exc.to_dict())


@router.get("/tiers", response_model=List[TierInfo])
async def list_tiers():
    """List the available plan tiers and their limits."""
    return [TierInfo(name=tier.value, limits=get_tier_limits(tier)) for tier in PlanTier]


@router.post("/calculate-count", response_model=GeneratorCountResponse)
async def calculate_count(request: GeneratorCountRequest):
    """
    Calculate the number of results without generating them.

    Used for the live preview while the user edits lists.
    """
    try:
        lists = _build_lists(request.lists)
        effective_mode, fell_back = resolve_mode(lists, request.mode)
        estimate = estimate_count(lists, request.mode)

        notices = []
        if fell_back:
            notices.append(GenerationNotice.PERMUTATION_FALLBACK_TO_PRODUCT)
        if estimate.overflow:
            notices.append(GenerationNotice.COUNT_OVERFLOW)

        return GeneratorCountResponse(
            total_count=estimate.value,
            overflow=estimate.overflow,
            effective_mode=effective_mode,
            notices=notices
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Count calculation failed")
        raise HTTPException(status_code=500, detail=f"Error calculating count: {str(e)}")


@router.post("/preview", response_model=GeneratorPreviewResponse)
def generate_preview(request: GeneratorPreviewRequest):
    """
    Generate the first N results under the plan's limits.
    """
    try:
        lists = _build_lists(request.lists)
        limits = _resolve_limits(request)
        check_limits(lists, limits)

        _, fell_back = resolve_mode(lists, request.config.mode)
        estimate = estimate_count(lists, request.config.mode)

        size = min(request.preview_limit, config.PREVIEW_LIMIT, limits.max_combinations)
        preview = list(itertools.islice(iter_results(lists, request.config), size))

        notices = []
        if fell_back:
            notices.append(GenerationNotice.PERMUTATION_FALLBACK_TO_PRODUCT)
        if estimate.exceeds(limits.max_combinations):
            notices.append(GenerationNotice.TRUNCATED)
        if estimate.overflow:
            notices.append(GenerationNotice.COUNT_OVERFLOW)

        return GeneratorPreviewResponse(
            total_count=estimate.value,
            overflow=estimate.overflow,
            preview=preview,
            notices=notices
        )
    except AdmissionError as e:
        raise _admission_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Preview generation failed")
        raise HTTPException(status_code=500, detail=f"Error generating preview: {str(e)}")


@router.post("/generate", response_model=GenerationResult)
def generate_results(request: GeneratorRequest):
    """
    Generate all results allowed by the plan.

    Output beyond the plan's max_combinations is truncated, not rejected.
    """
    try:
        lists = _build_lists(request.lists)
        limits = _resolve_limits(request)
        result = generate(lists, request.config, limits)
        logger.info(
            "Generated %d of %d results (truncated=%s, overflow=%s)",
            len(result.items), result.total_count, result.truncated, result.overflow
        )
        return result
    except AdmissionError as e:
        raise _admission_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Generation failed")
        raise HTTPException(status_code=500, detail=f"Error generating results: {str(e)}")


@router.post("/export")
def export_file(request: GeneratorExportRequest) -> StreamingResponse:
    """
    Generate results and return them as a downloadable file.

    The export format must be included in the plan's allowed exports.
    CSV output larger than one chunk is returned as a zip of CSV parts.
    """
    try:
        lists = _build_lists(request.lists)
        limits = _resolve_limits(request)
        result = generate(lists, request.config, limits)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename, media_type, content = build_export_file(
            result,
            request.format,
            f"{request.filename_prefix}_{timestamp}",
            limits=limits,
            chunk_size=config.CSV_CHUNK_SIZE
        )
    except AdmissionError as e:
        raise _admission_error(e)
    except ExportNotAllowed as e:
        logger.info("Export rejected: %s", e)
        raise HTTPException(status_code=403, detail=e.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Export failed")
        raise HTTPException(status_code=500, detail=f"Error exporting results: {str(e)}")

    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )
