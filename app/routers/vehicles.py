# =============================================================================
# app/routers/vehicles.py - Vehicle Fleet Endpoints
# =============================================================================
# Mounted at /fleet. Sub-resources: vehicles, drivers, fuel-logs,
# maintenance, fines, documents and the cost report.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.dependencies import CurrentUser
from core.models.vehicles import (
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
    DriverCreate,
    DriverResponse,
    DriverUpdate,
    FineCreate,
    FineResponse,
    FineUpdate,
    FuelLogCreate,
    FuelLogResponse,
    FuelLogUpdate,
    MaintenanceCreate,
    MaintenanceResponse,
    MaintenanceUpdate,
    UpcomingMaintenance,
    VehicleCostReport,
    VehicleCreate,
    VehicleResponse,
    VehicleStatus,
    VehicleStatusCounts,
    VehicleUpdate,
)
from core.services.vehicle_service import VehicleService

router = APIRouter()

RowId = Annotated[UUID, Path(description="Row UUID")]
VehicleFilter = Annotated[UUID | None, Query(alias="vehicleId")]


# =============================================================================
# Vehicles
# =============================================================================

@router.get("/vehicles", response_model=list[VehicleResponse])
async def list_vehicles(user: CurrentUser, status: VehicleStatus | None = None):
    return VehicleService.list_vehicles(user.id, status=status.value if status else None)


@router.get("/vehicles/status-counts", response_model=VehicleStatusCounts)
async def vehicle_status_counts(user: CurrentUser):
    return VehicleService.status_counts(user.id)


@router.post("/vehicles", response_model=VehicleResponse, status_code=201)
async def create_vehicle(body: VehicleCreate, user: CurrentUser):
    """Register a vehicle. The plate is trimmed and upper-cased."""
    return VehicleService.create_vehicle(user.id, body)


@router.get("/vehicles/{row_id}", response_model=VehicleResponse)
async def get_vehicle(row_id: RowId, user: CurrentUser):
    return VehicleService.get_vehicle(row_id, user.id)


@router.patch("/vehicles/{row_id}", response_model=VehicleResponse)
async def update_vehicle(row_id: RowId, body: VehicleUpdate, user: CurrentUser):
    return VehicleService.update_vehicle(row_id, user.id, body)


@router.delete("/vehicles/{row_id}", status_code=204)
async def delete_vehicle(row_id: RowId, user: CurrentUser):
    VehicleService.delete_vehicle(row_id, user.id)


# =============================================================================
# Drivers
# =============================================================================

@router.get("/drivers", response_model=list[DriverResponse])
async def list_drivers(user: CurrentUser):
    return VehicleService.list_drivers(user.id)


@router.post("/drivers", response_model=DriverResponse, status_code=201)
async def create_driver(body: DriverCreate, user: CurrentUser):
    return VehicleService.create_driver(user.id, body)


@router.patch("/drivers/{row_id}", response_model=DriverResponse)
async def update_driver(row_id: RowId, body: DriverUpdate, user: CurrentUser):
    return VehicleService.update_driver(row_id, user.id, body)


@router.delete("/drivers/{row_id}", status_code=204)
async def delete_driver(row_id: RowId, user: CurrentUser):
    VehicleService.delete_driver(row_id, user.id)


# =============================================================================
# Fuel Logs
# =============================================================================

@router.get("/fuel-logs", response_model=list[FuelLogResponse])
async def list_fuel_logs(
    user: CurrentUser,
    vehicle_id: VehicleFilter = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 20,
):
    """Latest refuellings first."""
    return VehicleService.list_fuel_logs(user.id, vehicle_id=vehicle_id, limit=limit)


@router.post("/fuel-logs", response_model=FuelLogResponse, status_code=201)
async def create_fuel_log(body: FuelLogCreate, user: CurrentUser):
    """
    Register a refuelling.

    precoLitro is computed from valorTotal / litros. An odometer reading is
    recorded when odometro is greater than zero.
    """
    return VehicleService.create_fuel_log(user.id, body)


@router.patch("/fuel-logs/{row_id}", response_model=FuelLogResponse)
async def update_fuel_log(row_id: RowId, body: FuelLogUpdate, user: CurrentUser):
    return VehicleService.update_fuel_log(row_id, user.id, body)


@router.delete("/fuel-logs/{row_id}", status_code=204)
async def delete_fuel_log(row_id: RowId, user: CurrentUser):
    VehicleService.delete_fuel_log(row_id, user.id)


# =============================================================================
# Maintenance
# =============================================================================

@router.get("/maintenance", response_model=list[MaintenanceResponse])
async def list_maintenance(
    user: CurrentUser,
    vehicle_id: VehicleFilter = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 20,
):
    return VehicleService.list_maintenance(user.id, vehicle_id=vehicle_id, limit=limit)


@router.get("/maintenance/upcoming", response_model=list[UpcomingMaintenance])
async def upcoming_maintenance(user: CurrentUser):
    """Next due maintenance per vehicle, by km or by date."""
    return VehicleService.upcoming_maintenance(user.id)


@router.post("/maintenance", response_model=MaintenanceResponse, status_code=201)
async def create_maintenance(body: MaintenanceCreate, user: CurrentUser):
    return VehicleService.create_maintenance(user.id, body)


@router.patch("/maintenance/{row_id}", response_model=MaintenanceResponse)
async def update_maintenance(row_id: RowId, body: MaintenanceUpdate, user: CurrentUser):
    return VehicleService.update_maintenance(row_id, user.id, body)


@router.delete("/maintenance/{row_id}", status_code=204)
async def delete_maintenance(row_id: RowId, user: CurrentUser):
    VehicleService.delete_maintenance(row_id, user.id)


# =============================================================================
# Fines
# =============================================================================

@router.get("/fines", response_model=list[FineResponse])
async def list_fines(user: CurrentUser, vehicle_id: VehicleFilter = None):
    return VehicleService.list_fines(user.id, vehicle_id=vehicle_id)


@router.post("/fines", response_model=FineResponse, status_code=201)
async def create_fine(body: FineCreate, user: CurrentUser):
    return VehicleService.create_fine(user.id, body)


@router.patch("/fines/{row_id}", response_model=FineResponse)
async def update_fine(row_id: RowId, body: FineUpdate, user: CurrentUser):
    return VehicleService.update_fine(row_id, user.id, body)


@router.delete("/fines/{row_id}", status_code=204)
async def delete_fine(row_id: RowId, user: CurrentUser):
    VehicleService.delete_fine(row_id, user.id)


# =============================================================================
# Documents
# =============================================================================

@router.get("/documents", response_model=list[DocumentResponse])
async def list_documents(user: CurrentUser, vehicle_id: VehicleFilter = None):
    """Documents ordered by expiry date, soonest first."""
    return VehicleService.list_documents(user.id, vehicle_id=vehicle_id)


@router.post("/documents", response_model=DocumentResponse, status_code=201)
async def create_document(body: DocumentCreate, user: CurrentUser):
    return VehicleService.create_document(user.id, body)


@router.patch("/documents/{row_id}", response_model=DocumentResponse)
async def update_document(row_id: RowId, body: DocumentUpdate, user: CurrentUser):
    return VehicleService.update_document(row_id, user.id, body)


@router.delete("/documents/{row_id}", status_code=204)
async def delete_document(row_id: RowId, user: CurrentUser):
    VehicleService.delete_document(row_id, user.id)


# =============================================================================
# Reports
# =============================================================================

@router.get("/reports/costs", response_model=VehicleCostReport)
async def cost_report(user: CurrentUser, vehicle_id: VehicleFilter = None):
    """Fuel + maintenance + fines per vehicle, highest total first."""
    return VehicleService.cost_report(user.id, vehicle_id=vehicle_id)
