"""initial_schema

Revision ID: 3f9c2a7b1d40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op

import stayhub.models  # noqa: F401
from stayhub.database import Base

# revision identifiers, used by Alembic.
revision: str = '3f9c2a7b1d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Baseline: every table as declared by the models at this revision.
    # Later revisions must use explicit op.* operations.
    Base.metadata.create_all(bind=op.get_bind())


def downgrade() -> None:
    Base.metadata.drop_all(bind=op.get_bind())
