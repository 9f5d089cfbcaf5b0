from sqlalchemy.orm import Session
from authz.models.role import RoleModel


class RoleRepository:
    """Repository for RoleModel operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, role_id: str) -> RoleModel | None:
        """Get role by ID"""
        return self.db.query(RoleModel).filter(RoleModel.id == role_id).first()

    def get_all(self) -> list[RoleModel]:
        """Get all roles"""
        return self.db.query(RoleModel).order_by(RoleModel.id).all()

    def create(self, role: RoleModel) -> RoleModel:
        """Create new role"""
        self.db.add(role)
        self.db.commit()
        self.db.refresh(role)
        return role
