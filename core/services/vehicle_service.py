# =============================================================================
# core/services/vehicle_service.py - Vehicle Fleet Business Logic
# =============================================================================
# CRUD for vehicles, drivers, fuel logs, maintenance events, fines and
# documents, plus status counts, upcoming maintenance and the cost report.
#
# Every fleet table carries user_id. Rows that point at a vehicle or a
# driver are only written after checking that it belongs to the caller.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from app.exceptions import ResourceNotFoundError
from core.models.vehicles import (
    DocumentCreate,
    DocumentUpdate,
    DriverCreate,
    DriverUpdate,
    FineCreate,
    FineUpdate,
    FuelLogCreate,
    FuelLogUpdate,
    MaintenanceCreate,
    MaintenanceUpdate,
    VehicleCreate,
    VehicleStatus,
    VehicleUpdate,
)
from lib.fleet_reports import build_cost_report
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

UPCOMING_VIEW = "v_vehicle_proximas_manutencoes"
UPCOMING_LIMIT = 30


def price_per_litre(total: Any, litres: Any) -> float | None:
    """valor_total / litros, or None when litros is not positive."""
    if litres is None or total is None or float(litres) <= 0:
        return None
    return round(float(total) / float(litres), 3)


# =============================================================================
# Generic row helpers
# =============================================================================

def _list(
    table: str,
    user_id: UUID | str,
    order: str,
    desc: bool = True,
    limit: int | None = None,
    vehicle_id: UUID | str | None = None,
) -> list[dict[str, Any]]:
    client = SupabaseClient.get_client()
    query = client.table(table).select("*").eq("user_id", str(user_id))
    if vehicle_id:
        query = query.eq("vehicle_id", str(vehicle_id))
    query = query.order(order, desc=desc)
    if limit:
        query = query.limit(limit)

    response = SupabaseClient.execute(
        query,
        code=f"{table.upper()}_LIST_FAILED",
        message=f"Failed to list {table}",
    )
    return response.data or []


def _get(table: str, resource: str, row_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
    row = SupabaseClient.fetch_row(table, row_id, user_id=user_id)
    if not row:
        raise ResourceNotFoundError(resource, str(row_id))
    return row


def _create(table: str, user_id: UUID | str, payload: dict[str, Any]) -> dict[str, Any]:
    try:
        row = SupabaseClient.insert_row(table, {**payload, "user_id": str(user_id)})
    except Exception as e:
        logger.error(f"Failed to insert into {table}: {e}")
        raise
    logger.info(f"Created {table} row: {row['id']}")
    return row


def _update(
    table: str,
    resource: str,
    row_id: UUID | str,
    user_id: UUID | str,
    updates: dict[str, Any],
) -> dict[str, Any]:
    row = _get(table, resource, row_id, user_id)
    if not updates:
        return row
    updated = SupabaseClient.update_row(table, row_id, updates, user_id=user_id)
    logger.info(f"Updated {table} row: {row_id}")
    return updated or {**row, **updates}


def _delete(table: str, resource: str, row_id: UUID | str, user_id: UUID | str) -> None:
    _get(table, resource, row_id, user_id)
    SupabaseClient.delete_row(table, row_id, user_id=user_id)
    logger.info(f"Deleted {table} row: {row_id}")


def _fields(data: BaseModel, partial: bool = False) -> dict[str, Any]:
    return data.model_dump(mode="json", exclude_unset=partial)


class VehicleService:
    """Service for the vehicle fleet module."""

    # =========================================================================
    # Ownership checks
    # =========================================================================

    @staticmethod
    def _check_refs(user_id: UUID | str, payload: dict[str, Any]) -> None:
        if payload.get("vehicle_id"):
            VehicleService.get_vehicle(payload["vehicle_id"], user_id)
        if payload.get("driver_id"):
            _get("drivers", "Driver", payload["driver_id"], user_id)

    # =========================================================================
    # Vehicles
    # =========================================================================

    @staticmethod
    def list_vehicles(user_id: UUID | str, status: str | None = None) -> list[dict[str, Any]]:
        """Vehicles newest first, optionally with one status."""
        vehicles = _list("vehicles", user_id, "created_at")
        if status:
            vehicles = [v for v in vehicles if v.get("status") == status]
        return vehicles

    @staticmethod
    def get_vehicle(vehicle_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        return _get("vehicles", "Vehicle", vehicle_id, user_id)

    @staticmethod
    def create_vehicle(user_id: UUID | str, data: VehicleCreate) -> dict[str, Any]:
        return _create("vehicles", user_id, _fields(data))

    @staticmethod
    def update_vehicle(vehicle_id: UUID | str, user_id: UUID | str, data: VehicleUpdate) -> dict[str, Any]:
        return _update("vehicles", "Vehicle", vehicle_id, user_id, _fields(data, partial=True))

    @staticmethod
    def delete_vehicle(vehicle_id: UUID | str, user_id: UUID | str) -> None:
        _delete("vehicles", "Vehicle", vehicle_id, user_id)

    @staticmethod
    def status_counts(user_id: UUID | str) -> dict[str, int]:
        """Number of vehicles per status, plus the total."""
        vehicles = _list("vehicles", user_id, "created_at")
        counts = {status.value: 0 for status in VehicleStatus}
        for vehicle in vehicles:
            if vehicle.get("status") in counts:
                counts[vehicle["status"]] += 1
        return {"total": len(vehicles), **counts}

    # =========================================================================
    # Drivers
    # =========================================================================

    @staticmethod
    def list_drivers(user_id: UUID | str) -> list[dict[str, Any]]:
        return _list("drivers", user_id, "created_at", limit=50)

    @staticmethod
    def create_driver(user_id: UUID | str, data: DriverCreate) -> dict[str, Any]:
        return _create("drivers", user_id, _fields(data))

    @staticmethod
    def update_driver(driver_id: UUID | str, user_id: UUID | str, data: DriverUpdate) -> dict[str, Any]:
        return _update("drivers", "Driver", driver_id, user_id, _fields(data, partial=True))

    @staticmethod
    def delete_driver(driver_id: UUID | str, user_id: UUID | str) -> None:
        _delete("drivers", "Driver", driver_id, user_id)

    # =========================================================================
    # Fuel Logs
    # =========================================================================

    @staticmethod
    def list_fuel_logs(
        user_id: UUID | str,
        vehicle_id: UUID | str | None = None,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        """Fuel logs newest first."""
        return _list("fuel_logs", user_id, "data", limit=limit, vehicle_id=vehicle_id)

    @staticmethod
    def _record_odometer(vehicle_id: str, odometer: Any) -> None:
        if odometer is None or float(odometer) <= 0:
            return
        SupabaseClient.insert_row(
            "odometer_readings",
            {"vehicle_id": vehicle_id, "valor": float(odometer), "fonte": "abastecimento"},
        )
        logger.debug(f"Recorded odometer {odometer} for vehicle {vehicle_id}")

    @staticmethod
    def create_fuel_log(user_id: UUID | str, data: FuelLogCreate) -> dict[str, Any]:
        """
        Register a refuelling.

        preco_litro is derived; an odometer reading is inserted when
        odometro > 0.
        """
        payload = _fields(data)
        VehicleService._check_refs(user_id, payload)
        payload["preco_litro"] = price_per_litre(payload["valor_total"], payload["litros"])
        payload["data"] = payload["data"] or datetime.now(timezone.utc).isoformat()

        row = _create("fuel_logs", user_id, payload)
        VehicleService._record_odometer(payload["vehicle_id"], payload.get("odometro"))
        return row

    @staticmethod
    def update_fuel_log(log_id: UUID | str, user_id: UUID | str, data: FuelLogUpdate) -> dict[str, Any]:
        current = _get("fuel_logs", "Fuel log", log_id, user_id)
        updates = _fields(data, partial=True)
        VehicleService._check_refs(user_id, updates)

        if "litros" in updates or "valor_total" in updates:
            merged = {**current, **updates}
            updates["preco_litro"] = price_per_litre(merged.get("valor_total"), merged.get("litros"))

        row = _update("fuel_logs", "Fuel log", log_id, user_id, updates)
        if "odometro" in updates:
            VehicleService._record_odometer(str(row["vehicle_id"]), updates["odometro"])
        return row

    @staticmethod
    def delete_fuel_log(log_id: UUID | str, user_id: UUID | str) -> None:
        _delete("fuel_logs", "Fuel log", log_id, user_id)

    # =========================================================================
    # Maintenance
    # =========================================================================

    @staticmethod
    def list_maintenance(
        user_id: UUID | str,
        vehicle_id: UUID | str | None = None,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        return _list("maintenance_events", user_id, "created_at", limit=limit, vehicle_id=vehicle_id)

    @staticmethod
    def create_maintenance(user_id: UUID | str, data: MaintenanceCreate) -> dict[str, Any]:
        payload = _fields(data)
        VehicleService._check_refs(user_id, payload)
        return _create("maintenance_events", user_id, payload)

    @staticmethod
    def update_maintenance(event_id: UUID | str, user_id: UUID | str, data: MaintenanceUpdate) -> dict[str, Any]:
        updates = _fields(data, partial=True)
        VehicleService._check_refs(user_id, updates)
        return _update("maintenance_events", "Maintenance event", event_id, user_id, updates)

    @staticmethod
    def delete_maintenance(event_id: UUID | str, user_id: UUID | str) -> None:
        _delete("maintenance_events", "Maintenance event", event_id, user_id)

    @staticmethod
    def upcoming_maintenance(user_id: UUID | str) -> list[dict[str, Any]]:
        """
        Next due maintenance per vehicle/template from the backend view.

        The view has no user_id column, so rows are limited to the caller's
        vehicles.
        """
        vehicle_ids = [str(v["id"]) for v in _list("vehicles", user_id, "created_at")]
        if not vehicle_ids:
            return []

        client = SupabaseClient.get_client()
        response = SupabaseClient.execute(
            client.table(UPCOMING_VIEW).select("*").in_("vehicle_id", vehicle_ids).limit(UPCOMING_LIMIT),
            code="UPCOMING_MAINTENANCE_FAILED",
            message="Failed to read upcoming maintenance",
        )
        return response.data or []

    # =========================================================================
    # Fines
    # =========================================================================

    @staticmethod
    def list_fines(user_id: UUID | str, vehicle_id: UUID | str | None = None) -> list[dict[str, Any]]:
        return _list("fines", user_id, "data", limit=30, vehicle_id=vehicle_id)

    @staticmethod
    def create_fine(user_id: UUID | str, data: FineCreate) -> dict[str, Any]:
        payload = _fields(data)
        VehicleService._check_refs(user_id, payload)
        return _create("fines", user_id, payload)

    @staticmethod
    def update_fine(fine_id: UUID | str, user_id: UUID | str, data: FineUpdate) -> dict[str, Any]:
        updates = _fields(data, partial=True)
        VehicleService._check_refs(user_id, updates)
        return _update("fines", "Fine", fine_id, user_id, updates)

    @staticmethod
    def delete_fine(fine_id: UUID | str, user_id: UUID | str) -> None:
        _delete("fines", "Fine", fine_id, user_id)

    # =========================================================================
    # Documents
    # =========================================================================

    @staticmethod
    def list_documents(user_id: UUID | str, vehicle_id: UUID | str | None = None) -> list[dict[str, Any]]:
        """Documents by expiry date, soonest first."""
        return _list("documents", user_id, "validade", desc=False, limit=30, vehicle_id=vehicle_id)

    @staticmethod
    def create_document(user_id: UUID | str, data: DocumentCreate) -> dict[str, Any]:
        payload = _fields(data)
        VehicleService._check_refs(user_id, payload)
        return _create("documents", user_id, payload)

    @staticmethod
    def update_document(document_id: UUID | str, user_id: UUID | str, data: DocumentUpdate) -> dict[str, Any]:
        updates = _fields(data, partial=True)
        VehicleService._check_refs(user_id, updates)
        return _update("documents", "Document", document_id, user_id, updates)

    @staticmethod
    def delete_document(document_id: UUID | str, user_id: UUID | str) -> None:
        _delete("documents", "Document", document_id, user_id)

    # =========================================================================
    # Cost Report
    # =========================================================================

    @staticmethod
    def cost_report(user_id: UUID | str, vehicle_id: UUID | str | None = None) -> dict[str, Any]:
        """Fuel + maintenance + fines per vehicle, sorted by total desc."""
        if vehicle_id:
            VehicleService.get_vehicle(vehicle_id, user_id)

        client = SupabaseClient.get_client()

        def amounts(table: str, column: str) -> list[dict[str, Any]]:
            response = SupabaseClient.execute(
                client.table(table).select(f"vehicle_id,{column}").eq("user_id", str(user_id)),
                code="COST_REPORT_FAILED",
                message=f"Failed to read {table} costs",
            )
            return response.data or []

        report = build_cost_report(
            _list("vehicles", user_id, "placa", desc=False),
            amounts("fuel_logs", "valor_total"),
            amounts("maintenance_events", "custo"),
            amounts("fines", "valor"),
            vehicle_id=str(vehicle_id) if vehicle_id else None,
        )
        logger.debug(f"Cost report for user {user_id}: total={report['totals']['total']}")
        return report
