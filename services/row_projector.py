"""
Projects one enrollment submission into the positional rows of each sheet.
Layouts are fixed by column index; the sheets have no header-based mapping,
so every row of a tab must keep the same length and order.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from schemas.submission import (
    BankTransferPayment,
    CardPayment,
    DependentSchema,
    SubmissionSchema,
    SupplementalPlanSchema,
)
from services.normalizer import (
    DEFAULT_TIMEZONE,
    cell,
    compose_address,
    currency_cell,
    format_date,
)

PRIMARY_RELATIONSHIP = "Titular"

POLICY_COLUMNS = (
    "operador",
    "fecha_registro",
    "tipo_venta",
    "clave_seguridad",
    "parentesco",
    "nombre",
    "apellidos",
    "sexo",
    "correo",
    "telefono",
    "telefono2",
    "fecha_nacimiento",
    "estado_migratorio",
    "ssn",
    "ingresos",
    "ocupacion",
    "nacionalidad",
    "aplica",
    "cantidad_dependientes",
    "direccion",
    "compania",
    "plan",
    "credito_fiscal",
    "prima",
    "link",
    "observaciones",
    "client_id",
)
# Columns a dependent row fills; everything else stays blank.
DEPENDENT_COLUMNS = frozenset({
    "operador",
    "fecha_registro",
    "tipo_venta",
    "clave_seguridad",
    "parentesco",
    "nombre",
    "apellidos",
    "fecha_nacimiento",
    "estado_migratorio",
    "ssn",
    "aplica",
    "client_id",
})

# Drafts reuse the policy layout minus the client id, then three bookkeeping columns.
DRAFT_ID_COLUMN = len(POLICY_COLUMNS) - 1
DRAFT_TIMESTAMP_COLUMN = DRAFT_ID_COLUMN + 1
DRAFT_JSON_COLUMN = DRAFT_ID_COLUMN + 2


@dataclass
class ProjectedRows:
    client_id: str
    policies: list[list[Any]] = field(default_factory=list)
    plans: list[list[Any]] = field(default_factory=list)
    payments: list[list[Any]] = field(default_factory=list)


def submission_address(s: SubmissionSchema) -> str:
    return compose_address(
        po_box=s.po_box,
        street=s.direccion,
        unit=s.casa_apartamento,
        county=s.condado,
        city=s.ciudad,
        state=s.estado,
        postal_code=s.codigo_postal,
    )


def _shared_columns(s: SubmissionSchema) -> dict[str, Any]:
    return {
        "operador": cell(s.operador),
        "fecha_registro": cell(s.fecha_registro),
        "tipo_venta": cell(s.tipo_venta),
        "clave_seguridad": cell(s.clave_seguridad),
    }


def _primary_values(s: SubmissionSchema) -> dict[str, Any]:
    return {
        **_shared_columns(s),
        "parentesco": PRIMARY_RELATIONSHIP,
        "nombre": cell(s.nombre),
        "apellidos": cell(s.apellidos),
        "sexo": cell(s.sexo),
        "correo": cell(s.correo),
        "telefono": cell(s.telefono),
        "telefono2": cell(s.telefono2),
        "fecha_nacimiento": cell(s.fecha_nacimiento),
        "estado_migratorio": cell(s.estado_migratorio),
        "ssn": cell(s.ssn),
        "ingresos": currency_cell(s.ingresos),
        "ocupacion": cell(s.ocupacion),
        "nacionalidad": cell(s.nacionalidad),
        "aplica": cell(s.aplica),
        "cantidad_dependientes": s.cantidad_dependientes or "0",
        "direccion": submission_address(s),
        "compania": cell(s.compania),
        "plan": cell(s.plan),
        "credito_fiscal": currency_cell(s.credito_fiscal),
        "prima": currency_cell(s.prima),
        "link": cell(s.link),
        "observaciones": cell(s.observaciones),
    }


def _dependent_values(s: SubmissionSchema, dep: DependentSchema) -> dict[str, Any]:
    return {
        **_shared_columns(s),
        "parentesco": cell(dep.parentesco),
        "nombre": cell(dep.nombre),
        "apellidos": cell(dep.apellido),
        "fecha_nacimiento": cell(dep.fecha_nacimiento),
        "estado_migratorio": cell(dep.estado_migratorio),
        "ssn": cell(dep.ssn),
        "aplica": cell(dep.aplica),
    }


def _to_policy_row(values: dict[str, Any], allowed=None) -> list[Any]:
    return [
        values.get(col, "") if allowed is None or col in allowed else ""
        for col in POLICY_COLUMNS
    ]


def policy_rows(s: SubmissionSchema, client_id: str) -> list[list[Any]]:
    """Primary applicant row ("Titular") followed by one row per dependent."""
    rows = [_to_policy_row({**_primary_values(s), "client_id": client_id})]
    for dep in s.dependents:
        values = {**_dependent_values(s, dep), "client_id": client_id}
        rows.append(_to_policy_row(values, DEPENDENT_COLUMNS))
    return rows


def _beneficiary(plan: SupplementalPlanSchema) -> str:
    return " / ".join(
        cell(v)
        for v in (
            plan.beneficiario_nombre,
            plan.beneficiario_fecha_nacimiento,
            plan.beneficiario_direccion,
            plan.beneficiario_relacion,
        )
    )


def plan_rows(
    s: SubmissionSchema,
    client_id: str,
    now: Optional[datetime] = None,
    tz_name: str = DEFAULT_TIMEZONE,
) -> list[list[Any]]:
    today = format_date(now, tz_name)
    address = submission_address(s)
    return [
        [
            client_id,
            today,
            s.full_name,
            cell(s.telefono),
            cell(s.sexo),
            cell(p.fecha_nacimiento),
            address,
            cell(s.correo),
            cell(s.estado_migratorio),
            cell(s.ssn),
            _beneficiary(p),
            cell(p.tipo),
            cell(p.cobertura_tipo),
            cell(p.beneficio),
            currency_cell(p.beneficio_diario),
            currency_cell(p.deducible),
            currency_cell(p.prima),
            cell(p.comentarios),
        ]
        for p in s.cigna_plans
    ]


def payment_rows(s: SubmissionSchema, client_id: str) -> list[list[Any]]:
    """Zero or one row; the trailing six columns depend on the payment variant."""
    payment = s.payment()
    if payment is None:
        return []
    row: list[Any] = [client_id, s.full_name, cell(s.telefono), payment.method]
    if isinstance(payment, BankTransferPayment):
        acct = payment.account
        row += [
            cell(acct.num_cuenta),
            cell(acct.num_ruta),
            cell(acct.nombre_banco),
            cell(acct.titular_cuenta),
            cell(acct.social_cuenta),
        ]
    elif isinstance(payment, CardPayment):
        card = payment.card
        row += [
            cell(card.num_tarjeta),
            cell(card.fecha_vencimiento),
            cell(card.titular_tarjeta),
            cell(card.cvc),
            "",
        ]
    row.append(cell(payment.observaciones))
    return [row]


def project_submission(
    s: SubmissionSchema,
    client_id: str,
    now: Optional[datetime] = None,
    tz_name: str = DEFAULT_TIMEZONE,
) -> ProjectedRows:
    return ProjectedRows(
        client_id=client_id,
        policies=policy_rows(s, client_id),
        plans=plan_rows(s, client_id, now, tz_name),
        payments=payment_rows(s, client_id),
    )


def draft_row(
    s: SubmissionSchema,
    draft_id: str,
    timestamp: str,
    payload: Optional[dict[str, Any]] = None,
) -> list[Any]:
    """
    Primary policy columns (no client id) + draft id, timestamp and the JSON payload.
    `payload` is the request body as posted; without it the model is dumped back.
    """
    # Only drafts fall back to the operator who last edited the draft.
    row = _to_policy_row({**_primary_values(s), "operador": s.operator})[:DRAFT_ID_COLUMN]
    raw = payload if payload is not None else s.raw_payload()
    row += [draft_id, timestamp, json.dumps(raw, indent=2, ensure_ascii=False)]
    return row
