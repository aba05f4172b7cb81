import enum
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Date,
    Enum,
    ForeignKey,
    Table,
    Integer,
    Numeric,
    JSON,
    UniqueConstraint,
    Uuid,
    Index,
    text,
)
from sqlalchemy.orm import declared_attr, relationship, Mapped, mapped_column

from ..db import Base


def uuid_pk() -> Mapped[uuid.UUID]:
    return mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


def status_column(status_enum: type, default) -> Mapped:
    # Stored as the short code ("A", "E", "DEMITIDO"...), not the member name
    return mapped_column(
        Enum(
            status_enum,
            values_callable=lambda members: [m.value for m in members],
            native_enum=False,
            length=20,
            validate_strings=True,
        ),
        nullable=False,
        default=default,
        index=True,
    )


# ---------- Status enums (one closed set per entity) ----------

class UserStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class CompanyStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class DepartmentStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class CostCenterStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class EpiStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class RoleStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class ProjectStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class EmployeeRecordStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class EmployeeStatus(str, enum.Enum):
    """Employment situation; only ATIVO <-> DEMITIDO is driven by terminations."""

    ACTIVE = "ATIVO"
    ON_VACATION = "FERIAS"
    ON_LEAVE = "AFASTADO"
    TERMINATED = "DEMITIDO"


class VacationStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class TerminationStatus(str, enum.Enum):
    ACTIVE = "A"
    DELETED = "E"


class UserFunction(str, enum.Enum):
    ADMIN = "ADMIN"
    HR = "RH"
    MANAGER = "GESTOR"


class ContractRegime(str, enum.Enum):
    CLT = "CLT"
    PJ = "PJ"
    INTERN = "ESTAGIO"
    TEMPORARY = "TEMPORARIO"


class Sex(str, enum.Enum):
    MALE = "M"
    FEMALE = "F"


class MaritalStatus(str, enum.Enum):
    SINGLE = "SOLTEIRO"
    MARRIED = "CASADO"
    DIVORCED = "DIVORCIADO"
    WIDOWED = "VIUVO"
    STABLE_UNION = "UNIAO_ESTAVEL"


# ---------- Users ----------

class User(Base):
    __tablename__ = "usuarios"

    active_status = UserStatus.ACTIVE
    deleted_status = UserStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    senha_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    funcao: Mapped[UserFunction] = mapped_column(
        Enum(UserFunction, values_callable=lambda members: [m.value for m in members], native_enum=False, length=20),
        nullable=False,
        default=UserFunction.HR,
    )
    status: Mapped[UserStatus] = status_column(UserStatus, UserStatus.ACTIVE)
    criado_em: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    ultimo_login_em: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE


class AuditMixin:
    """Creator/last-modifier stamps and timestamps shared by every resource table."""

    criado_por_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        "criado_por", Uuid(as_uuid=True), ForeignKey("usuarios.id")
    )
    atualizado_por_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        "atualizado_por", Uuid(as_uuid=True), ForeignKey("usuarios.id")
    )
    criado_em: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    atualizado_em: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    @declared_attr
    def criado_por(cls) -> Mapped[Optional[User]]:
        return relationship(User, foreign_keys=f"{cls.__name__}.criado_por_id", lazy="joined")

    @declared_attr
    def atualizado_por(cls) -> Mapped[Optional[User]]:
        return relationship(User, foreign_keys=f"{cls.__name__}.atualizado_por_id", lazy="joined")


# Association table for many-to-many Role<->Epi
role_epis = Table(
    "funcoes_epis",
    Base.metadata,
    Column("funcao_id", Uuid(as_uuid=True), ForeignKey("funcoes.id", ondelete="CASCADE"), primary_key=True),
    Column("epi_id", Uuid(as_uuid=True), ForeignKey("epis.id", ondelete="CASCADE"), primary_key=True),
    UniqueConstraint("funcao_id", "epi_id", name="uq_funcao_epi"),
)


# ---------- Company and company-scoped records ----------

class Company(AuditMixin, Base):
    __tablename__ = "empresas"

    active_status = CompanyStatus.ACTIVE
    deleted_status = CompanyStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    nome_fantasia: Mapped[str] = mapped_column(String(255), nullable=False)
    razao_social: Mapped[str] = mapped_column(String(255), nullable=False)
    cnpj: Mapped[str] = mapped_column(String(14), nullable=False, index=True)
    rua: Mapped[str] = mapped_column(String(255), nullable=False)
    numero: Mapped[str] = mapped_column(String(10), nullable=False)
    complemento: Mapped[Optional[str]] = mapped_column(String(100))
    bairro: Mapped[str] = mapped_column(String(100), nullable=False)
    cidade: Mapped[str] = mapped_column(String(100), nullable=False)
    estado: Mapped[str] = mapped_column(String(2), nullable=False)
    cep: Mapped[str] = mapped_column(String(10), nullable=False)
    data_fundacao: Mapped[Optional[date]] = mapped_column(Date)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    celular: Mapped[Optional[str]] = mapped_column(String(20))
    telefone: Mapped[Optional[str]] = mapped_column(String(20))
    status: Mapped[CompanyStatus] = status_column(CompanyStatus, CompanyStatus.ACTIVE)


class Department(AuditMixin, Base):
    __tablename__ = "setores"

    active_status = DepartmentStatus.ACTIVE
    deleted_status = DepartmentStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    empresa_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("empresas.id"), nullable=False, index=True)
    status: Mapped[DepartmentStatus] = status_column(DepartmentStatus, DepartmentStatus.ACTIVE)


class CostCenter(AuditMixin, Base):
    __tablename__ = "centros_custos"

    active_status = CostCenterStatus.ACTIVE
    deleted_status = CostCenterStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    empresa_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("empresas.id"), nullable=False, index=True)
    status: Mapped[CostCenterStatus] = status_column(CostCenterStatus, CostCenterStatus.ACTIVE)


class Epi(AuditMixin, Base):
    __tablename__ = "epis"

    active_status = EpiStatus.ACTIVE
    deleted_status = EpiStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    descricao: Mapped[Optional[str]] = mapped_column(String(255))
    certificado_aprovacao: Mapped[Optional[str]] = mapped_column(String(20))  # CA number
    empresa_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("empresas.id"), nullable=False, index=True)
    status: Mapped[EpiStatus] = status_column(EpiStatus, EpiStatus.ACTIVE)

    funcoes = relationship("Role", secondary=role_epis, back_populates="epis")


class Role(AuditMixin, Base):
    __tablename__ = "funcoes"

    active_status = RoleStatus.ACTIVE
    deleted_status = RoleStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    empresa_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("empresas.id"), nullable=False, index=True)
    status: Mapped[RoleStatus] = status_column(RoleStatus, RoleStatus.ACTIVE)

    epis: Mapped[List[Epi]] = relationship(Epi, secondary=role_epis, back_populates="funcoes", lazy="selectin")


class Project(AuditMixin, Base):
    __tablename__ = "projetos"

    active_status = ProjectStatus.ACTIVE
    deleted_status = ProjectStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    descricao: Mapped[str] = mapped_column(String(255), nullable=False)
    data_inicio: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    cno: Mapped[str] = mapped_column(String(12), nullable=False)
    empresa_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("empresas.id"), nullable=False, index=True)
    status: Mapped[ProjectStatus] = status_column(ProjectStatus, ProjectStatus.ACTIVE)


# ---------- Employees ----------

class Employee(AuditMixin, Base):
    __tablename__ = "funcionarios"

    active_status = EmployeeRecordStatus.ACTIVE
    deleted_status = EmployeeRecordStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    cpf: Mapped[str] = mapped_column(String(11), nullable=False, index=True)
    carteira_identidade: Mapped[Optional[str]] = mapped_column(String(20))
    sexo: Mapped[Optional[Sex]] = mapped_column(
        Enum(Sex, values_callable=lambda members: [m.value for m in members], native_enum=False, length=1)
    )
    data_nascimento: Mapped[date] = mapped_column(Date, nullable=False)
    estado_civil: Mapped[Optional[MaritalStatus]] = mapped_column(
        Enum(MaritalStatus, values_callable=lambda members: [m.value for m in members], native_enum=False, length=20)
    )
    naturalidade: Mapped[Optional[str]] = mapped_column(String(100))
    nacionalidade: Mapped[Optional[str]] = mapped_column(String(100))
    email: Mapped[Optional[str]] = mapped_column(String(255))
    celular: Mapped[Optional[str]] = mapped_column(String(20))
    pis: Mapped[Optional[str]] = mapped_column(String(11))
    regime_contratacao: Mapped[ContractRegime] = mapped_column(
        Enum(ContractRegime, values_callable=lambda members: [m.value for m in members], native_enum=False, length=20),
        nullable=False,
    )
    data_admissao: Mapped[date] = mapped_column(Date, nullable=False)
    salario: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    carga_horaria: Mapped[Optional[int]] = mapped_column(Integer)
    gestor: Mapped[Optional[str]] = mapped_column(String(255))

    rua: Mapped[str] = mapped_column(String(255), nullable=False)
    numero: Mapped[str] = mapped_column(String(10), nullable=False)
    complemento: Mapped[Optional[str]] = mapped_column(String(100))
    bairro: Mapped[str] = mapped_column(String(100), nullable=False)
    cidade: Mapped[str] = mapped_column(String(100), nullable=False)
    estado: Mapped[str] = mapped_column(String(2), nullable=False)
    cep: Mapped[str] = mapped_column(String(10), nullable=False)

    empresa_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("empresas.id"), nullable=False, index=True)
    funcao_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), ForeignKey("funcoes.id"))
    setor_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), ForeignKey("setores.id"))
    centro_custo_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), ForeignKey("centros_custos.id"))

    status_funcionario: Mapped[EmployeeStatus] = status_column(EmployeeStatus, EmployeeStatus.ACTIVE)
    status: Mapped[EmployeeRecordStatus] = status_column(EmployeeRecordStatus, EmployeeRecordStatus.ACTIVE)

    funcao = relationship(Role)
    setor = relationship(Department)
    centro_custo = relationship(CostCenter)


class Vacation(AuditMixin, Base):
    __tablename__ = "ferias"

    active_status = VacationStatus.ACTIVE
    deleted_status = VacationStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    data_inicio: Mapped[date] = mapped_column(Date, nullable=False)
    data_fim: Mapped[date] = mapped_column(Date, nullable=False)
    observacao: Mapped[Optional[str]] = mapped_column(String(255))
    funcionario_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("funcionarios.id"), nullable=False, index=True)
    status: Mapped[VacationStatus] = status_column(VacationStatus, VacationStatus.ACTIVE)

    funcionario = relationship(Employee)


class Termination(AuditMixin, Base):
    __tablename__ = "demissoes"
    __table_args__ = (
        # At most one open termination per employee, enforced by the store itself
        Index(
            "uq_demissao_ativa_funcionario",
            "funcionario_id",
            unique=True,
            postgresql_where=text("status = 'A'"),
            sqlite_where=text("status = 'A'"),
        ),
    )

    active_status = TerminationStatus.ACTIVE
    deleted_status = TerminationStatus.DELETED

    id: Mapped[uuid.UUID] = uuid_pk()
    data: Mapped[date] = mapped_column(Date, nullable=False)
    motivo_interno: Mapped[str] = mapped_column(String(255), nullable=False)
    motivo_trabalhista: Mapped[str] = mapped_column(String(255), nullable=False)
    acao_trabalhista: Mapped[Optional[str]] = mapped_column(String(255))
    forma_demissao: Mapped[str] = mapped_column(String(255), nullable=False)
    funcionario_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("funcionarios.id"), nullable=False)
    status: Mapped[TerminationStatus] = status_column(TerminationStatus, TerminationStatus.ACTIVE)

    funcionario = relationship(Employee)


# ---------- Audit ----------

class AuditLog(Base):
    __tablename__ = "auditoria"

    id: Mapped[uuid.UUID] = uuid_pk()
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    entity_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(20), nullable=False)  # CREATE|UPDATE|DELETE
    actor_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), ForeignKey("usuarios.id"))
    changes_json: Mapped[Optional[dict]] = mapped_column(JSON)
    timestamp_utc: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    integrity_hash: Mapped[Optional[str]] = mapped_column(String(64))
