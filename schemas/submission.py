from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _PayloadModel(BaseModel):
    """
    The frontend posts camelCase keys, may send numbers or checkbox booleans for
    text inputs, and sends fields the backend does not model.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="allow",
    )

    @field_validator("*", mode="before")
    @classmethod
    def bool_as_sheet_text(cls, v):
        # USER_ENTERED turns these back into boolean cells.
        if isinstance(v, bool):
            return "TRUE" if v else "FALSE"
        return v


class DependentSchema(_PayloadModel):
    parentesco: Optional[str] = None
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    fecha_nacimiento: Optional[str] = None
    estado_migratorio: Optional[str] = None
    ssn: Optional[str] = None
    aplica: Optional[str] = None


class SupplementalPlanSchema(_PayloadModel):
    """One Cigna supplemental plan entry."""

    fecha_nacimiento: Optional[str] = None
    beneficiario_nombre: Optional[str] = None
    beneficiario_fecha_nacimiento: Optional[str] = None
    beneficiario_direccion: Optional[str] = None
    beneficiario_relacion: Optional[str] = None
    tipo: Optional[str] = None
    cobertura_tipo: Optional[str] = None
    beneficio: Optional[str] = None
    beneficio_diario: Optional[str] = None
    deducible: Optional[str] = None
    prima: Optional[str] = None
    comentarios: Optional[str] = None


class BankAccountSchema(_PayloadModel):
    num_cuenta: Optional[str] = None
    num_ruta: Optional[str] = None
    nombre_banco: Optional[str] = None
    titular_cuenta: Optional[str] = None
    social_cuenta: Optional[str] = None


class CardSchema(_PayloadModel):
    num_tarjeta: Optional[str] = None
    fecha_vencimiento: Optional[str] = None
    titular_tarjeta: Optional[str] = None
    cvc: Optional[str] = None


class BankTransferPayment(BaseModel):
    method: Literal["banco"] = "banco"
    account: BankAccountSchema = Field(default_factory=BankAccountSchema)
    observaciones: Optional[str] = None


class CardPayment(BaseModel):
    method: Literal["tarjeta"] = "tarjeta"
    card: CardSchema = Field(default_factory=CardSchema)
    observaciones: Optional[str] = None


PaymentRecord = Annotated[Union[BankTransferPayment, CardPayment], Field(discriminator="method")]


class SubmissionSchema(_PayloadModel):
    """Enrollment form payload: primary applicant plus nested dependents, plans and payment."""

    operador: Optional[str] = None
    operador_borrador: Optional[str] = None
    fecha_registro: Optional[str] = None
    tipo_venta: Optional[str] = None
    clave_seguridad: Optional[str] = None

    nombre: Optional[str] = None
    apellidos: Optional[str] = None
    sexo: Optional[str] = None
    correo: Optional[str] = None
    telefono: Optional[str] = None
    telefono2: Optional[str] = None
    fecha_nacimiento: Optional[str] = None
    estado_migratorio: Optional[str] = None
    ssn: Optional[str] = None
    ingresos: Optional[str] = None
    ocupacion: Optional[str] = Field(None, alias="ocupación")
    nacionalidad: Optional[str] = None
    aplica: Optional[str] = None
    cantidad_dependientes: Optional[str] = None

    po_box: Optional[str] = None
    direccion: Optional[str] = None
    casa_apartamento: Optional[str] = None
    condado: Optional[str] = None
    ciudad: Optional[str] = None
    estado: Optional[str] = None
    codigo_postal: Optional[str] = None

    compania: Optional[str] = None
    plan: Optional[str] = None
    credito_fiscal: Optional[str] = None
    prima: Optional[str] = None
    link: Optional[str] = None
    observaciones: Optional[str] = None

    dependents: list[DependentSchema] = Field(default_factory=list)
    cigna_plans: list[SupplementalPlanSchema] = Field(default_factory=list)

    metodo_pago: Optional[Literal["banco", "tarjeta"]] = None
    pago_banco: Optional[BankAccountSchema] = None
    pago_tarjeta: Optional[CardSchema] = None
    pago_observaciones: Optional[str] = None

    @field_validator("dependents", "cigna_plans", mode="before")
    @classmethod
    def null_list_is_empty(cls, v):
        return [] if v is None else v

    @field_validator("metodo_pago", mode="before")
    @classmethod
    def blank_method_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def operator(self) -> str:
        return self.operador or self.operador_borrador or ""

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.nombre, self.apellidos) if p)

    @property
    def folder_name(self) -> str:
        """Drive folder name used by the frontend for this client's documents."""
        return " ".join(p for p in (self.nombre, self.apellidos, self.telefono) if p)

    def payment(self) -> Optional[PaymentRecord]:
        """Return the declared payment method as a tagged record, or None."""
        observaciones = self.pago_observaciones or self.observaciones
        if self.metodo_pago == "banco":
            return BankTransferPayment(
                account=self.pago_banco or BankAccountSchema(),
                observaciones=observaciones,
            )
        if self.metodo_pago == "tarjeta":
            return CardPayment(
                card=self.pago_tarjeta or CardSchema(),
                observaciones=observaciones,
            )
        return None

    def raw_payload(self) -> dict:
        """
        Rebuilt payload (camelCase keys, unknown fields included). Values are the
        validated ones; callers holding the request body should store that instead.
        """
        return self.model_dump(by_alias=True, exclude_unset=True)


class DraftSaveRequest(SubmissionSchema):
    draft_id: str = Field(..., min_length=1)
