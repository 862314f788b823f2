# =============================================================================
# tests/test_vehicle_service.py - Fleet Service Tests
# =============================================================================
# This module contains tests for:
# - Vehicle CRUD and status counts
# - Fuel logs (price per litre, odometer readings)
# - Ownership checks on vehicle / driver references
# - Upcoming maintenance and the cost report
# =============================================================================

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from app.exceptions import ResourceNotFoundError
from core.models.vehicles import (
    DocumentCreate,
    DriverCreate,
    FineCreate,
    FuelLogCreate,
    FuelLogUpdate,
    MaintenanceCreate,
    VehicleCreate,
    VehicleUpdate,
)
from core.services.vehicle_service import VehicleService, price_per_litre


@pytest.fixture
def vehicle(fake_db, user_id):
    return VehicleService.create_vehicle(user_id, VehicleCreate(placa="abc1d23", modelo="Fiat Strada"))


class TestPricePerLitre:
    """Tests for price_per_litre."""

    def test_rounded_to_three_places(self):
        assert price_per_litre(250, 42.3) == 5.91

    @pytest.mark.parametrize("litres", [0, None, -1])
    def test_no_price_without_litres(self, litres):
        assert price_per_litre(100, litres) is None


class TestVehicles:
    """Vehicle CRUD."""

    def test_create_normalizes_plate(self, vehicle, user_id):
        assert vehicle["placa"] == "ABC1D23"
        assert vehicle["status"] == "ativo"
        assert vehicle["user_id"] == user_id

    def test_status_filter_and_counts(self, fake_db, user_id, vehicle):
        VehicleService.create_vehicle(user_id, VehicleCreate(placa="XYZ9K88", modelo="CG 160", status="manutencao"))
        VehicleService.create_vehicle(user_id, VehicleCreate(placa="QQQ1A11", modelo="Gol", status="manutencao"))

        in_shop = VehicleService.list_vehicles(user_id, status="manutencao")
        counts = VehicleService.status_counts(user_id)

        assert {v["placa"] for v in in_shop} == {"XYZ9K88", "QQQ1A11"}
        assert counts == {"total": 3, "ativo": 1, "manutencao": 2, "inativo": 0, "vendido": 0}

    def test_update_and_delete(self, fake_db, user_id, vehicle):
        updated = VehicleService.update_vehicle(vehicle["id"], user_id, VehicleUpdate(status="vendido"))
        assert updated["status"] == "vendido"

        VehicleService.delete_vehicle(vehicle["id"], user_id)
        assert VehicleService.list_vehicles(user_id) == []

    def test_other_users_vehicle_hidden(self, fake_db, other_user_id, vehicle):
        with pytest.raises(ResourceNotFoundError):
            VehicleService.get_vehicle(vehicle["id"], other_user_id)


class TestFuelLogs:
    """Fuel log rules."""

    def test_create_derives_price_and_records_odometer(self, fake_db, user_id, vehicle):
        log = VehicleService.create_fuel_log(
            user_id,
            FuelLogCreate(vehicle_id=vehicle["id"], litros=40, valor_total=232.0, odometro=15230),
        )

        assert log["preco_litro"] == 5.8
        assert log["data"] is not None
        readings = fake_db.rows("odometer_readings")
        assert len(readings) == 1
        assert readings[0]["valor"] == 15230.0
        assert readings[0]["fonte"] == "abastecimento"

    def test_zero_odometer_not_recorded(self, fake_db, user_id, vehicle):
        VehicleService.create_fuel_log(
            user_id,
            FuelLogCreate(
                vehicle_id=vehicle["id"],
                litros=0,
                valor_total=0,
                odometro=0,
                data=datetime(2025, 3, 1, tzinfo=timezone.utc),
            ),
        )

        assert fake_db.rows("odometer_readings") == []
        assert fake_db.rows("fuel_logs")[0]["preco_litro"] is None

    def test_update_recomputes_price(self, fake_db, user_id, vehicle):
        log = VehicleService.create_fuel_log(
            user_id, FuelLogCreate(vehicle_id=vehicle["id"], litros=40, valor_total=200)
        )

        updated = VehicleService.update_fuel_log(log["id"], user_id, FuelLogUpdate(valor_total=220))

        assert updated["preco_litro"] == 5.5

    def test_foreign_vehicle_rejected(self, fake_db, user_id, other_user_id):
        foreign = VehicleService.create_vehicle(other_user_id, VehicleCreate(placa="OUT1A11", modelo="Uno"))

        with pytest.raises(ResourceNotFoundError):
            VehicleService.create_fuel_log(
                user_id, FuelLogCreate(vehicle_id=foreign["id"], litros=10, valor_total=50)
            )
        assert fake_db.rows("fuel_logs") == []

    def test_foreign_driver_rejected(self, fake_db, user_id, other_user_id, vehicle):
        driver = VehicleService.create_driver(other_user_id, DriverCreate(nome="Carlos"))

        with pytest.raises(ResourceNotFoundError):
            VehicleService.create_fine(
                user_id,
                FineCreate(vehicle_id=vehicle["id"], driver_id=driver["id"], data=date(2025, 3, 1), valor=195.23),
            )


class TestFleetQueries:
    """Lists, upcoming maintenance and costs."""

    def test_documents_soonest_expiry_first(self, fake_db, user_id, vehicle):
        for day in (20, 5, 12):
            VehicleService.create_document(
                user_id, DocumentCreate(vehicle_id=vehicle["id"], tipo="licenciamento", validade=date(2025, 6, day))
            )

        documents = VehicleService.list_documents(user_id)

        assert [d["validade"] for d in documents] == ["2025-06-05", "2025-06-12", "2025-06-20"]

    def test_upcoming_maintenance_scoped_to_user(self, fake_db, user_id, vehicle):
        fake_db.seed("v_vehicle_proximas_manutencoes", [
            {"vehicle_id": vehicle["id"], "nome": "Troca de óleo", "tipo": "km", "proxima_km": 20000},
            {"vehicle_id": str(uuid4()), "nome": "Alheia", "tipo": "data", "proxima_data": "2025-05-01"},
        ])

        upcoming = VehicleService.upcoming_maintenance(user_id)

        assert [u["nome"] for u in upcoming] == ["Troca de óleo"]

    def test_upcoming_without_vehicles(self, fake_db, user_id):
        assert VehicleService.upcoming_maintenance(user_id) == []

    def test_cost_report(self, fake_db, user_id, vehicle):
        other = VehicleService.create_vehicle(user_id, VehicleCreate(placa="XYZ9K88", modelo="CG 160"))
        VehicleService.create_fuel_log(user_id, FuelLogCreate(vehicle_id=vehicle["id"], litros=40, valor_total=232))
        VehicleService.create_maintenance(
            user_id, MaintenanceCreate(vehicle_id=other["id"], titulo="Revisão", custo=480)
        )
        VehicleService.create_fine(
            user_id, FineCreate(vehicle_id=vehicle["id"], data=date(2025, 3, 1), valor=130.16)
        )

        report = VehicleService.cost_report(user_id)

        assert [v["placa"] for v in report["vehicles"]] == ["XYZ9K88", "ABC1D23"]
        assert report["totals"]["total"] == 842.16

    def test_cost_report_unknown_vehicle(self, fake_db, user_id):
        with pytest.raises(ResourceNotFoundError):
            VehicleService.cost_report(user_id, vehicle_id=str(uuid4()))
