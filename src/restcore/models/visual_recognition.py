from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClassResult(BaseModel):
    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    class_name: str = Field(alias="class")
    score: float
    type_hierarchy: Optional[str] = None


class ClassifierResult(BaseModel):
    name: str
    classifier_id: str
    classes: List[ClassResult] = Field(default_factory=list)


class ErrorInfo(BaseModel):
    code: int
    description: str
    error_id: str


class ClassifiedImage(BaseModel):
    source_url: Optional[str] = None
    resolved_url: Optional[str] = None
    image: Optional[str] = None
    error: Optional[ErrorInfo] = None
    classifiers: List[ClassifierResult] = Field(default_factory=list)


class WarningInfo(BaseModel):
    warning_id: str
    description: str


class ClassifiedImages(BaseModel):
    """Results of classifying one or more images."""

    custom_classes: Optional[int] = None
    images_processed: Optional[int] = None
    images: List[ClassifiedImage] = Field(default_factory=list)
    warnings: List[WarningInfo] = Field(default_factory=list)


class Class(BaseModel):
    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    class_name: str = Field(alias="class")


class Classifier(BaseModel):
    """A custom classifier and its training status."""

    model_config = ConfigDict(extra="allow")

    classifier_id: str
    name: str
    owner: Optional[str] = None
    status: Optional[str] = None
    core_ml_enabled: Optional[bool] = None
    explanation: Optional[str] = None
    created: Optional[str] = None
    classes: List[Class] = Field(default_factory=list)
    retrained: Optional[str] = None
    updated: Optional[str] = None
