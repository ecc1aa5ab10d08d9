"""Sneaker list, detail and photo endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status

from sneaker_inventory.api.models import MoveResult, SneakerCreate, SneakerUpdate
from sneaker_inventory.domain.models import (
    Partition,
    PartitionSummary,
    PhotoRole,
    SneakerRecord,
)

if TYPE_CHECKING:
    from sneaker_inventory.containers import AppContainer


def _get_api_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str | None = Depends(_get_api_token),
) -> None:
    """Ensure requests carry the configured token, when one is configured."""
    if api_token and x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(dependencies=[Depends(require_token)])


@router.get("/sneakers")
async def list_all(request: Request) -> dict[str, object]:
    """Return every sneaker ordered by name."""
    container: AppContainer = request.app.state.container
    records = container.view_service.sorted_all()
    return {"items": [_serialize_record(record) for record in records]}


@router.get("/sneakers/{record_id}")
async def get_sneaker(record_id: UUID, request: Request) -> dict[str, object]:
    """Return one sneaker."""
    container: AppContainer = request.app.state.container
    return _serialize_record(container.record_store.get(record_id))


@router.patch("/sneakers/{record_id}")
async def update_sneaker(
    record_id: UUID, payload: SneakerUpdate, request: Request
) -> dict[str, object]:
    """Apply edited fields to a sneaker."""
    container: AppContainer = request.app.state.container
    container.record_store.update(record_id, payload.to_fields())
    return _serialize_record(container.record_store.get(record_id))


@router.delete("/sneakers/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sneaker(record_id: UUID, request: Request) -> Response:
    """Delete a sneaker permanently."""
    container: AppContainer = request.app.state.container
    container.record_store.delete(record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/collection")
async def list_collection(request: Request, q: str = "") -> dict[str, object]:
    """Return the filtered collection with its total value."""
    return _partition_view(request, Partition.COLLECTION, q)


@router.post("/collection", status_code=status.HTTP_201_CREATED)
async def add_to_collection(
    payload: SneakerCreate, request: Request
) -> dict[str, object]:
    """Add a sneaker to the collection."""
    return _create(request, payload, Partition.COLLECTION)


@router.get("/wishlist")
async def list_wishlist(request: Request, q: str = "") -> dict[str, object]:
    """Return the filtered wishlist with its total value."""
    return _partition_view(request, Partition.WISHLIST, q)


@router.post("/wishlist", status_code=status.HTTP_201_CREATED)
async def add_to_wishlist(payload: SneakerCreate, request: Request) -> dict[str, object]:
    """Add a sneaker to the wishlist."""
    return _create(request, payload, Partition.WISHLIST)


@router.post("/wishlist/{record_id}/move")
async def move_to_collection(record_id: UUID, request: Request) -> MoveResult:
    """Move a wishlist sneaker into the collection under a new id."""
    container: AppContainer = request.app.state.container
    new_id = container.transfer_service.move_to_collection(record_id)
    return MoveResult(previous_id=str(record_id), id=str(new_id))


@router.get("/sneakers/{record_id}/photos/{role}")
async def get_photo(record_id: UUID, role: PhotoRole, request: Request) -> Response:
    """Return the JPEG stored in a photo slot."""
    container: AppContainer = request.app.state.container
    blob = container.photo_service.blob(record_id, role)
    if blob is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(content=blob, media_type="image/jpeg")


@router.put("/sneakers/{record_id}/photos/{role}")
async def put_photo(
    record_id: UUID, role: PhotoRole, request: Request
) -> dict[str, object]:
    """Encode the request body as JPEG and store it in a photo slot."""
    container: AppContainer = request.app.state.container
    raw = await request.body()
    container.photo_service.attach(record_id, role, raw)
    return _serialize_record(container.record_store.get(record_id))


@router.delete("/sneakers/{record_id}/photos/{role}")
async def delete_photo(
    record_id: UUID, role: PhotoRole, request: Request
) -> dict[str, object]:
    """Clear a photo slot."""
    container: AppContainer = request.app.state.container
    container.photo_service.detach(record_id, role)
    return _serialize_record(container.record_store.get(record_id))


def _create(
    request: Request, payload: SneakerCreate, partition: Partition
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    record_id = container.record_store.create(payload.to_fields(), partition)
    return _serialize_record(container.record_store.get(record_id))


def _partition_view(
    request: Request, partition: Partition, query: str
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    records = container.view_service.filtered(partition, query)
    summary = container.view_service.summary(partition)
    return {
        "items": [_serialize_record(record) for record in records],
        "summary": _serialize_summary(summary),
    }


def _serialize_record(record: SneakerRecord) -> dict[str, object]:
    return {
        "id": str(record.id),
        "name": record.name,
        "brand": record.brand,
        "size": record.size,
        "size_unit": record.size_unit.value,
        "price": record.price,
        "currency": record.currency.value,
        "condition": record.condition,
        "partition": record.partition.value,
        "photos": [role.value for role in PhotoRole if role in record.photos],
    }


def _serialize_summary(summary: PartitionSummary) -> dict[str, object]:
    return {
        "partition": summary.partition.value,
        "count": summary.count,
        "total_value": summary.total_value,
        "currency": summary.currency.value if summary.currency else None,
    }
