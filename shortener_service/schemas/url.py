from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    # Not validated as a URL: the target is stored exactly as given
    url: str = Field(..., description="The original URL to be shortened")


class ShortenResponse(BaseModel):
    short_code: str
    short_url: str


class UrlMapping(BaseModel):
    """Mapping returned by the store and by the lookup endpoint

    from_attributes=True lets it be built straight from the SQLAlchemy row.
    """
    short_code: str
    original_url: str

    model_config = ConfigDict(from_attributes=True, frozen=True)
