from sqlalchemy.orm import Session
from authz.models.account import AccountModel


class AccountRepository:
    """Repository for AccountModel operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, account_id: str) -> AccountModel | None:
        """Get account by ID"""
        return self.db.query(AccountModel).filter(AccountModel.id == account_id).first()

    def get_all(self) -> list[AccountModel]:
        """Get all accounts"""
        return self.db.query(AccountModel).order_by(AccountModel.id).all()

    def create(self, account: AccountModel) -> AccountModel:
        """Create new account"""
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        return account
