from pydantic import BaseModel, ConfigDict, Field


class CsrfTokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    csrf_token: str = Field(..., alias="csrfToken", description="Encrypted token for x-csrf-token")
    cookie: str = Field(..., description="Raw companion value for x-csrf-raw")
