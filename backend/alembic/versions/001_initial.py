"""Initial migration - club competition tables

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'organisations',
        sa.Column('organisations_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('level', sa.String(50), nullable=True),
    )

    op.create_table(
        'members',
        sa.Column('members_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
    )

    op.create_table(
        'competition_coaches',
        sa.Column('competition_coaches_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
    )

    op.create_table(
        'competition_disciplines',
        sa.Column('competition_disciplines_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=True),
        sa.Column('team_event', sa.Boolean(), default=False),
    )

    op.create_table(
        'competitions',
        sa.Column('competitions_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('Name', sa.String(255), nullable=True),
        sa.Column('date_start', sa.Date(), nullable=True),
        sa.Column('date_end', sa.Date(), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('organisations_id', sa.Integer(),
                  sa.ForeignKey('organisations.organisations_id'), nullable=True, index=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'competition_entries',
        sa.Column('competition_entries_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('competitions_id', sa.Integer(),
                  sa.ForeignKey('competitions.competitions_id'), nullable=True, index=True),
        sa.Column('members_id', sa.Integer(),
                  sa.ForeignKey('members.members_id'), nullable=True, index=True),
        sa.Column('competition_coaches_id', sa.Integer(),
                  sa.ForeignKey('competition_coaches.competition_coaches_id'), nullable=True),
        sa.Column('competition_disciplines_id', sa.Integer(),
                  sa.ForeignKey('competition_disciplines.competition_disciplines_id'), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
    )

    op.create_table(
        'competition_teams',
        sa.Column('competition_teams_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('team_name', sa.String(255), nullable=True),
        sa.Column('competitions_id', sa.Integer(),
                  sa.ForeignKey('competitions.competitions_id'), nullable=True),
        sa.Column('competition_disciplines_id', sa.Integer(),
                  sa.ForeignKey('competition_disciplines.competition_disciplines_id'), nullable=True),
        sa.Column('medal', sa.String(20), nullable=True),
    )

    op.create_table(
        'competition_bouts',
        sa.Column('competition_bouts_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('competition_entries_id', sa.Integer(),
                  sa.ForeignKey('competition_entries.competition_entries_id'), nullable=True, index=True),
        sa.Column('competition_teams_id', sa.Integer(),
                  sa.ForeignKey('competition_teams.competition_teams_id'), nullable=True, index=True),
        sa.Column('competitions_id', sa.Integer(),
                  sa.ForeignKey('competitions.competitions_id'), nullable=True),
        sa.Column('result', sa.String(50), nullable=True),
        sa.Column('score_for', sa.Integer(), nullable=True),
        sa.Column('score_against', sa.Integer(), nullable=True),
        sa.Column('round', sa.String(50), nullable=True),
        sa.Column('opponent_name', sa.String(255), nullable=True),
        sa.Column('opponent_club', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'competition_results',
        sa.Column('competition_results_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('competition_entries_id', sa.Integer(),
                  sa.ForeignKey('competition_entries.competition_entries_id'), nullable=True, index=True),
        sa.Column('medal', sa.String(20), nullable=True),
        sa.Column('round_reached', sa.String(50), nullable=True),
    )


def downgrade() -> None:
    op.drop_table('competition_results')
    op.drop_table('competition_bouts')
    op.drop_table('competition_teams')
    op.drop_table('competition_entries')
    op.drop_table('competitions')
    op.drop_table('competition_disciplines')
    op.drop_table('competition_coaches')
    op.drop_table('members')
    op.drop_table('organisations')
