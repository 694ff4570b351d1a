from pydantic import BaseModel


class DraftSummary(BaseModel):
    """One row of the drafts tab as shown in the frontend's draft picker."""

    operador: str = ""
    fecha_registro: str = ""
    nombre: str = ""
    apellidos: str = ""
    telefono: str = ""
    correo: str = ""
    draft_id: str = ""
    timestamp: str = ""
    operador_borrador: str = ""
    json_data: str = ""
