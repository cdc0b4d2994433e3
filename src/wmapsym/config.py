import codecs

from pydantic import BaseModel, Field, field_validator


class ConverterConfig(BaseModel):
    output_prefix: str = Field("sym_", min_length=1)
    encoding: str = "utf-8"
    default_rotation: int = 0

    @field_validator("encoding")
    @classmethod
    def known_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"unknown encoding {v!r}")
        return v
