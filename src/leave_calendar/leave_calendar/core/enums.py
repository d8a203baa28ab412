from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Papel do usuário usado para autorização."""

    ADMIN = "admin"
    USER = "user"
    VIEWER = "viewer"


class LeaveType(str, Enum):
    """Tipos de afastamento suportados."""

    VACATION = "VACATION"
    MEDICAL_LEAVE = "MEDICAL_LEAVE"
    MATERNITY_LEAVE = "MATERNITY_LEAVE"
    PATERNITY_LEAVE = "PATERNITY_LEAVE"
    MARRIAGE = "MARRIAGE"
    BEREAVEMENT = "BEREAVEMENT"
    STUDY = "STUDY"
    BLOOD_DONATION = "BLOOD_DONATION"
    COURT_APPEARANCE = "COURT_APPEARANCE"
    ELECTORAL_REGISTRATION = "ELECTORAL_REGISTRATION"
    CASH_ALLOWANCE = "CASH_ALLOWANCE"
    WORK_ACCIDENT = "WORK_ACCIDENT"
    DISMISSAL = "DISMISSAL"
    DAY_OFF = "DAY_OFF"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        return LEAVE_TYPE_LABELS[self]


LEAVE_TYPE_LABELS = {
    LeaveType.VACATION: "Férias",
    LeaveType.MEDICAL_LEAVE: "Licença Médica",
    LeaveType.MATERNITY_LEAVE: "Licença Maternidade",
    LeaveType.PATERNITY_LEAVE: "Licença Paternidade",
    LeaveType.MARRIAGE: "Casamento",
    LeaveType.BEREAVEMENT: "Falecimento",
    LeaveType.STUDY: "Estudo",
    LeaveType.BLOOD_DONATION: "Doação de Sangue",
    LeaveType.COURT_APPEARANCE: "Comparecimento em Juízo",
    LeaveType.ELECTORAL_REGISTRATION: "Alistamento Eleitoral",
    LeaveType.CASH_ALLOWANCE: "Abono",
    LeaveType.WORK_ACCIDENT: "Acidente de Trabalho",
    LeaveType.DISMISSAL: "Dispensa",
    LeaveType.DAY_OFF: "Folga",
    LeaveType.OTHER: "Outro",
}


class ApprovalStatus(str, Enum):
    """Estado do fluxo de aprovação de um afastamento."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class LeaveStatus(str, Enum):
    """Situação no calendário, derivada das datas (não é persistida)."""

    ACTIVE = "ATIVO"
    PLANNED = "PLANEJADO"
    ENDED = "ENCERRADO"
