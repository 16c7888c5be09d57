from pydantic import BaseModel, ConfigDict, Field


class CategoryProperties(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None


class CategoryCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=1000)


class CategoryUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=120)
    description: str | None = Field(default=None, max_length=1000)


class SaveCategoryResponse(BaseModel):
    category_id: int


class CategoryListResponse(BaseModel):
    categories: list[CategoryProperties]
