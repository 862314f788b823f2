# =============================================================================
# core/models/vehicles.py - Vehicle Fleet Schemas
# =============================================================================
# Vehicles, drivers, fuel logs, maintenance events, fines and documents.
#
# Field names follow the fleet tables, which are in Portuguese
# (placa, modelo, odometro, ...); the camelCase aliasing still applies
# (odometro_atual -> odometroAtual).
# =============================================================================

import datetime as dt
from enum import Enum
from typing import Any, Literal
from uuid import UUID

from pydantic import Field, field_validator

from .common import CamelModel, PatchModel, require_text


class VehicleStatus(str, Enum):
    ATIVO = "ativo"
    MANUTENCAO = "manutencao"
    INATIVO = "inativo"
    VENDIDO = "vendido"


class MaintenanceStatus(str, Enum):
    PENDENTE = "pendente"
    AGENDADO = "agendado"
    CONCLUIDO = "concluido"
    CANCELADO = "cancelado"


class FineStatus(str, Enum):
    RECEBIDA = "recebida"
    EM_RECURSO = "em_recurso"
    PAGA = "paga"


class DocumentType(str, Enum):
    APOLICE = "apolice"
    LICENCIAMENTO = "licenciamento"
    VISTORIA = "vistoria"
    CNH = "cnh"
    MULTA = "multa"
    OUTRO = "outro"


def parse_tags(value: Any) -> list[str]:
    """
    Accept tags as a list or a comma-separated string.

    Example:
        parse_tags("frota, diesel,,")  # ["frota", "diesel"]
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(tag).strip() for tag in value if str(tag).strip()]


def normalize_plate(value: str) -> str:
    """Trim and upper-case a licence plate."""
    plate = value.strip().upper()
    if not plate:
        raise ValueError("placa must not be blank")
    return plate


# =============================================================================
# Vehicles
# =============================================================================

class VehicleCreate(CamelModel):
    """
    Example:
        {"placa": "abc1d23", "modelo": "Fiat Strada", "ano": 2022, "tags": "frota, carga"}
    """

    placa: str = Field(..., max_length=10)
    renavam: str | None = None
    modelo: str = Field(..., max_length=120)
    ano: int | None = Field(default=None, ge=1900, le=2100)
    tipo: Literal["carro", "moto"] = "carro"
    categoria: str | None = None
    status: VehicleStatus = VehicleStatus.ATIVO
    odometro_atual: float | None = Field(default=None, ge=0)
    local_atual: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("placa")
    @classmethod
    def _plate(cls, v: str) -> str:
        return normalize_plate(v)

    @field_validator("modelo")
    @classmethod
    def _modelo_not_blank(cls, v: str) -> str:
        return require_text(v, "modelo")

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> list[str]:
        return parse_tags(v)


class VehicleUpdate(PatchModel):
    non_nullable = ("placa", "modelo", "tipo", "status", "tags")

    placa: str | None = Field(default=None, max_length=10)
    renavam: str | None = None
    modelo: str | None = Field(default=None, max_length=120)
    ano: int | None = Field(default=None, ge=1900, le=2100)
    tipo: Literal["carro", "moto"] | None = None
    categoria: str | None = None
    status: VehicleStatus | None = None
    odometro_atual: float | None = Field(default=None, ge=0)
    local_atual: str | None = None
    tags: list[str] | None = None

    @field_validator("placa")
    @classmethod
    def _plate(cls, v: str | None) -> str | None:
        return None if v is None else normalize_plate(v)

    @field_validator("modelo")
    @classmethod
    def _modelo_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "modelo")

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> list[str] | None:
        return None if v is None else parse_tags(v)


class VehicleResponse(CamelModel):
    id: UUID
    placa: str
    renavam: str | None = None
    modelo: str
    ano: int | None = None
    tipo: str | None = None
    categoria: str | None = None
    status: VehicleStatus = VehicleStatus.ATIVO
    odometro_atual: float | None = None
    local_atual: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> list[str]:
        return parse_tags(v)


class VehicleStatusCounts(CamelModel):
    total: int = 0
    ativo: int = 0
    manutencao: int = 0
    inativo: int = 0
    vendido: int = 0


# =============================================================================
# Drivers
# =============================================================================

class DriverCreate(CamelModel):
    nome: str = Field(..., max_length=120)
    cnh_numero: str | None = None
    cnh_categoria: str | None = None
    cnh_validade: dt.date | None = None
    ativo: bool = True

    @field_validator("nome")
    @classmethod
    def _nome_not_blank(cls, v: str) -> str:
        return require_text(v, "nome")


class DriverUpdate(PatchModel):
    non_nullable = ("nome", "ativo")

    nome: str | None = Field(default=None, max_length=120)
    cnh_numero: str | None = None
    cnh_categoria: str | None = None
    cnh_validade: dt.date | None = None
    ativo: bool | None = None

    @field_validator("nome")
    @classmethod
    def _nome_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "nome")


class DriverResponse(CamelModel):
    id: UUID
    nome: str
    cnh_numero: str | None = None
    cnh_categoria: str | None = None
    cnh_validade: dt.date | None = None
    ativo: bool = True
    created_at: dt.datetime | None = None


# =============================================================================
# Fuel Logs
# =============================================================================

class FuelLogCreate(CamelModel):
    """
    A refuelling. preco_litro is derived (valor_total / litros).

    When odometro > 0 an odometer reading is recorded as well.
    """

    vehicle_id: UUID
    driver_id: UUID | None = None
    odometro: float | None = Field(default=None, ge=0)
    litros: float = Field(..., ge=0)
    valor_total: float = Field(..., ge=0)
    posto: str | None = None
    bandeira: str | None = None
    tipo_combustivel: str | None = None
    metodo_pagamento: str | None = None
    data: dt.datetime | None = Field(default=None, description="Defaults to now")
    notas: str | None = None


class FuelLogUpdate(PatchModel):
    non_nullable = ("vehicle_id", "litros", "valor_total", "data")

    vehicle_id: UUID | None = None
    driver_id: UUID | None = None
    odometro: float | None = Field(default=None, ge=0)
    litros: float | None = Field(default=None, ge=0)
    valor_total: float | None = Field(default=None, ge=0)
    posto: str | None = None
    bandeira: str | None = None
    tipo_combustivel: str | None = None
    metodo_pagamento: str | None = None
    data: dt.datetime | None = None
    notas: str | None = None


class FuelLogResponse(CamelModel):
    id: UUID
    vehicle_id: UUID
    driver_id: UUID | None = None
    odometro: float | None = None
    litros: float
    valor_total: float
    preco_litro: float | None = None
    posto: str | None = None
    bandeira: str | None = None
    tipo_combustivel: str | None = None
    metodo_pagamento: str | None = None
    data: dt.datetime
    notas: str | None = None


# =============================================================================
# Maintenance
# =============================================================================

class MaintenanceCreate(CamelModel):
    vehicle_id: UUID
    template_id: UUID | None = None
    titulo: str = Field(..., max_length=160)
    status: MaintenanceStatus = MaintenanceStatus.PENDENTE
    data_prevista: dt.date | None = None
    odometro_previsto: float | None = Field(default=None, ge=0)
    data_realizada: dt.date | None = None
    odometro_realizado: float | None = Field(default=None, ge=0)
    custo: float | None = Field(default=None, ge=0)
    notas: str | None = None

    @field_validator("titulo")
    @classmethod
    def _titulo_not_blank(cls, v: str) -> str:
        return require_text(v, "titulo")


class MaintenanceUpdate(PatchModel):
    non_nullable = ("vehicle_id", "titulo", "status")

    vehicle_id: UUID | None = None
    template_id: UUID | None = None
    titulo: str | None = Field(default=None, max_length=160)
    status: MaintenanceStatus | None = None
    data_prevista: dt.date | None = None
    odometro_previsto: float | None = Field(default=None, ge=0)
    data_realizada: dt.date | None = None
    odometro_realizado: float | None = Field(default=None, ge=0)
    custo: float | None = Field(default=None, ge=0)
    notas: str | None = None

    @field_validator("titulo")
    @classmethod
    def _titulo_not_blank(cls, v: str | None) -> str | None:
        return require_text(v, "titulo")


class MaintenanceResponse(CamelModel):
    id: UUID
    vehicle_id: UUID
    template_id: UUID | None = None
    titulo: str
    status: MaintenanceStatus = MaintenanceStatus.PENDENTE
    data_prevista: dt.date | None = None
    odometro_previsto: float | None = None
    data_realizada: dt.date | None = None
    odometro_realizado: float | None = None
    custo: float | None = None
    notas: str | None = None
    created_at: dt.datetime | None = None


class UpcomingMaintenance(CamelModel):
    """Row of the v_vehicle_proximas_manutencoes view."""

    vehicle_id: UUID
    template_id: UUID | None = None
    nome: str
    tipo: Literal["km", "data"]
    proxima_km: float | None = None
    proxima_data: dt.date | None = None


# =============================================================================
# Fines & Documents
# =============================================================================

class FineCreate(CamelModel):
    vehicle_id: UUID
    driver_id: UUID | None = None
    auto_infracao: str | None = None
    orgao: str | None = None
    data: dt.date
    valor: float = Field(..., ge=0)
    pontos: int | None = Field(default=None, ge=0)
    status: FineStatus = FineStatus.RECEBIDA
    vencimento: dt.date | None = None
    comprovante_url: str | None = None
    notas: str | None = None


class FineUpdate(PatchModel):
    non_nullable = ("vehicle_id", "data", "valor", "status")

    vehicle_id: UUID | None = None
    driver_id: UUID | None = None
    auto_infracao: str | None = None
    orgao: str | None = None
    data: dt.date | None = None
    valor: float | None = Field(default=None, ge=0)
    pontos: int | None = Field(default=None, ge=0)
    status: FineStatus | None = None
    vencimento: dt.date | None = None
    comprovante_url: str | None = None
    notas: str | None = None


class FineResponse(CamelModel):
    id: UUID
    vehicle_id: UUID
    driver_id: UUID | None = None
    auto_infracao: str | None = None
    orgao: str | None = None
    data: dt.date
    valor: float
    pontos: int | None = None
    status: FineStatus = FineStatus.RECEBIDA
    vencimento: dt.date | None = None
    comprovante_url: str | None = None
    notas: str | None = None
    created_at: dt.datetime | None = None


class DocumentCreate(CamelModel):
    vehicle_id: UUID | None = None
    driver_id: UUID | None = None
    tipo: DocumentType
    numero: str | None = None
    validade: dt.date | None = None
    arquivo_url: str | None = None
    status: str | None = None
    notas: str | None = None


class DocumentUpdate(PatchModel):
    non_nullable = ("tipo",)

    vehicle_id: UUID | None = None
    driver_id: UUID | None = None
    tipo: DocumentType | None = None
    numero: str | None = None
    validade: dt.date | None = None
    arquivo_url: str | None = None
    status: str | None = None
    notas: str | None = None


class DocumentResponse(CamelModel):
    id: UUID
    vehicle_id: UUID | None = None
    driver_id: UUID | None = None
    tipo: DocumentType
    numero: str | None = None
    validade: dt.date | None = None
    arquivo_url: str | None = None
    status: str | None = None
    notas: str | None = None
    created_at: dt.datetime | None = None


# =============================================================================
# Cost Report
# =============================================================================

class VehicleCost(CamelModel):
    vehicle_id: UUID
    placa: str
    modelo: str
    abastecimentos: float = 0.0
    manutencoes: float = 0.0
    multas: float = 0.0
    total: float = 0.0


class CostTotals(CamelModel):
    abastecimentos: float = 0.0
    manutencoes: float = 0.0
    multas: float = 0.0
    total: float = 0.0


class CostShare(CamelModel):
    categoria: str
    valor: float
    percentual: float


class VehicleCostReport(CamelModel):
    """Per-vehicle costs sorted by total desc, with fleet-wide totals."""

    vehicles: list[VehicleCost] = Field(default_factory=list)
    totals: CostTotals = Field(default_factory=CostTotals)
    breakdown: list[CostShare] = Field(default_factory=list)
