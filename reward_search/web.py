"""FastAPI application exposing the reward flight searches."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query

from .cabins import parse_cheapest_cabin
from .config import CHEAPEST_SEARCH_PAGE_SIZE, RANGE_SEARCH_PAGE_SIZE, Settings, load_settings
from .errors import InvalidPageRequestError, RewardSearchError
from .pagination import validate_page_request
from .repository import RewardFlightRepository, build_repository

logger = logging.getLogger(__name__)


def _parse_date(value: str, name: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise HTTPException(
            status_code=400, detail=f"Invalid '{name}' date format. Expected YYYY-MM-DD"
        ) from exc


def _check_page(page_number: int, page_size: int) -> None:
    try:
        validate_page_request(page_number, page_size)
    except InvalidPageRequestError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def create_app(
    repository: Optional[RewardFlightRepository] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Return an application answering searches from ``repository``.

    Without an explicit repository one is built from ``settings`` (or the
    environment when no settings are given).
    """

    settings = settings or load_settings()
    repo = repository if repository is not None else build_repository(settings)
    carrier_code = settings.carrier_code
    prefix = f"/api/v1/airline/{carrier_code.lower()}/reward-flights"

    app = FastAPI(title="Reward Search", description="Search cached reward flight availability")
    app.state.repository = repo

    @app.get(prefix + "/origin/{origin}/destination/{destination}/from/{from_date}/to/{to_date}")
    def latest_reward_flights(
        origin: str,
        destination: str,
        from_date: str,
        to_date: str,
        page_number: int = Query(0, alias="page-number"),
        page_size: int = Query(RANGE_SEARCH_PAGE_SIZE, alias="page-size"),
    ) -> Dict[str, Any]:
        start = _parse_date(from_date, "from")
        end = _parse_date(to_date, "to")
        _check_page(page_number, page_size)
        try:
            page = repo.range_search(
                origin, destination, carrier_code, start, end, page_number, page_size
            )
        except RewardSearchError as exc:
            logger.error("Database error: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to fetch reward flights") from exc
        return page.to_dict()

    @app.get(prefix + "/origin/{origin}/destination/{destination}/cabin/{cabin_type}/cheapest")
    def cheapest_reward_flights(
        origin: str,
        destination: str,
        cabin_type: str,
        page_number: int = Query(0, alias="page-number"),
        page_size: int = Query(CHEAPEST_SEARCH_PAGE_SIZE, alias="page-size"),
    ) -> Dict[str, Any]:
        try:
            cabin = parse_cheapest_cabin(cabin_type)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        _check_page(page_number, page_size)
        try:
            page = repo.cheapest_search(origin, destination, cabin, page_number, page_size)
        except RewardSearchError as exc:
            logger.error("Database error: %s", exc)
            raise HTTPException(
                status_code=500, detail="Failed to fetch cheapest reward flights"
            ) from exc
        return page.to_dict()

    return app


__all__ = ["create_app"]
