from pydantic import BaseModel, Field


class ImageUploadResponseDTO(BaseModel):
    url: str = Field(
        description="Public URL to put in a listing's images",
        examples=["/uploads/user-1/4f0c2b0e9d7a4a55a1f0e3c8f7d9b6aa.jpg"],
    )
