from pydantic import BaseModel, Field
from typing import List, Optional


class CannedQAView(BaseModel):
    index: int
    question: str
    answer: str


class CategoryView(BaseModel):
    category: str
    questions: List[CannedQAView] = Field(default_factory=list)
    # short imperative tips shown with the category
    tips: List[str] = Field(default_factory=list)


class ShortcutsOut(BaseModel):
    session_id: str
    category: Optional[str] = None
    shortcuts: List[CannedQAView] = Field(default_factory=list)
