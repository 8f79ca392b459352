from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.v1.schemas import (
    CriteriaSchema,
    FilterOptionsSchema,
    OptionSchema,
    StationListResponseSchema,
    StationSchema,
)
from app.application.exceptions import StationDirectoryError
from app.application.use_cases.filter_stations import (
    AMENITY_OPTIONS,
    AVAILABILITY_OPTIONS,
    CHARGER_TYPES,
    FilterStationsUseCase,
    default_criteria,
)
from app.core.config import settings
from app.domain.entities.filter_criteria import ANY, FilterCriteria
from app.wiring.dependencies import get_filter_use_case

router = APIRouter()


@router.get("/stations", response_model=StationListResponseSchema)
def list_stations(
    q: str = "",
    charger_type: str = ANY,
    availability: str = ANY,
    amenities: list[str] | None = Query(None),
    max_distance: float | None = Query(None, gt=0),
    uc: FilterStationsUseCase = Depends(get_filter_use_case),
):
    criteria = FilterCriteria(
        charger_type=charger_type,
        availability=availability,
        amenities=frozenset(amenities or ()),
        max_distance_km=max_distance or settings.DEFAULT_MAX_DISTANCE_KM,
    )
    try:
        result = uc.execute(q, criteria)
    except StationDirectoryError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return StationListResponseSchema(
        stations=[StationSchema.from_entity(s) for s in result.stations],
        count=len(result.stations),
        total=result.total,
        empty=result.empty,
        active_filter_count=result.active_filters,
    )


@router.get("/stations/{station_id}", response_model=StationSchema)
def get_station(station_id: str, uc: FilterStationsUseCase = Depends(get_filter_use_case)):
    return StationSchema.from_entity(uc.get_station(station_id))


@router.get("/filters/options", response_model=FilterOptionsSchema)
def filter_options():
    return FilterOptionsSchema(
        charger_types=list(CHARGER_TYPES),
        availability=[OptionSchema(value=value, label=label) for value, label in AVAILABILITY_OPTIONS],
        amenities=list(AMENITY_OPTIONS),
        min_distance=settings.MIN_DISTANCE_LIMIT_KM,
        max_distance=settings.MAX_DISTANCE_LIMIT_KM,
        default_criteria=CriteriaSchema.from_criteria("", default_criteria()),
    )
