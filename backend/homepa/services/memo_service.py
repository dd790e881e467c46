from typing import List, Optional
from sqlalchemy.orm import Session
from homepa.models.memo import Memo

DEFAULT_CATEGORY = "general"


class MemoService:
    """Owner-scoped access to memos.

    A memo owned by someone else behaves exactly like a missing one.
    """

    @staticmethod
    def list_memos(db: Session, user_id: int) -> List[Memo]:
        """Memos for a user, most recent first"""
        return db.query(Memo).filter(
            Memo.user_id == user_id
        ).order_by(Memo.created_at.desc(), Memo.id.desc()).all()

    @staticmethod
    def get_memo(db: Session, user_id: int, memo_id: int) -> Optional[Memo]:
        return db.query(Memo).filter(
            Memo.id == memo_id,
            Memo.user_id == user_id
        ).first()

    @staticmethod
    def create_memo(
        db: Session,
        user_id: int,
        content: str,
        category: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Memo:
        db_memo = Memo(
            user_id=user_id,
            content=content.strip(),
            category=category or DEFAULT_CATEGORY,
            tags=list(tags or []),
        )
        db.add(db_memo)
        db.commit()
        db.refresh(db_memo)
        return db_memo

    @staticmethod
    def update_memo(
        db: Session,
        user_id: int,
        memo_id: int,
        content: str,
        category: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Optional[Memo]:
        db_memo = MemoService.get_memo(db, user_id, memo_id)
        if db_memo is None:
            return None
        # Same semantics as create: omitted category/tags reset to defaults
        db_memo.content = content.strip()
        db_memo.category = category or DEFAULT_CATEGORY
        db_memo.tags = list(tags or [])
        db.commit()
        db.refresh(db_memo)
        return db_memo

    @staticmethod
    def delete_memo(db: Session, user_id: int, memo_id: int) -> bool:
        db_memo = MemoService.get_memo(db, user_id, memo_id)
        if db_memo is None:
            return False
        db.delete(db_memo)
        db.commit()
        return True


memo_service = MemoService()
