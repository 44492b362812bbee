from fastapi import APIRouter, HTTPException
from typing import List

from emergency_chat.data.canned import CANNED_QA, SAFETY_TIPS, EmergencyCategory
from emergency_chat.schemas.canned import CannedQAView, CategoryView

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[str])
async def list_categories():
    return [c.value for c in EmergencyCategory]


@router.get("/{label}", response_model=CategoryView)
async def get_category(label: str):
    """All canned questions and safety tips for one category."""
    try:
        category = EmergencyCategory.parse(label)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CategoryView(
        category=category.value,
        questions=[
            CannedQAView(index=i, question=qa.question, answer=qa.answer)
            for i, qa in enumerate(CANNED_QA[category])
        ],
        tips=list(SAFETY_TIPS[category]),
    )
