"""
Mahasiswa Panel — Student record schemas and the wire → store column mapping
"""
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

# wire field → store column
RECORD_COLUMNS: dict[str, str] = {
    "NAMA": "NAMA",
    "NIM": "NIM",
    "KELAS": "KELAS",
    "NILAI": "NILAI",
    "BIDANG": "BIDANG",
    "GENDER": "GENDER",
}


def _invalid(field: str) -> PydanticCustomError:
    return PydanticCustomError("invalid_number", "{field} harus berupa angka", {"field": field})


class MahasiswaPayload(BaseModel):
    """
    Body of create and update. NIM and NILAI arrive as form strings from
    the browser and are coerced here; text fields pass through untouched.
    """
    model_config = ConfigDict(extra="ignore")

    NAMA: str | None = None
    NIM: int
    KELAS: str | None = None
    NILAI: float
    BIDANG: str | None = None
    GENDER: str | None = None

    @field_validator("NIM", mode="before")
    @classmethod
    def coerce_nim(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise _invalid("NIM")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            pass
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            raise _invalid("NIM")
        if not math.isfinite(number):
            raise _invalid("NIM")
        return int(number)

    @field_validator("NILAI", mode="before")
    @classmethod
    def coerce_nilai(cls, value: Any) -> float:
        if isinstance(value, bool):
            raise _invalid("NILAI")
        try:
            number = float(str(value).strip()) if isinstance(value, str) else float(value)
        except (TypeError, ValueError):
            raise _invalid("NILAI")
        if not math.isfinite(number):
            raise _invalid("NILAI")
        return number

    def to_row(self) -> dict[str, Any]:
        """Map to store columns, leaving out fields the client did not send; explicit nulls are kept."""
        values = self.model_dump(exclude_unset=True)
        return {RECORD_COLUMNS[name]: value for name, value in values.items()}


class MahasiswaWriteResponse(BaseModel):
    success: bool = True
    message: str
    data: list[dict[str, Any]]
