"""Initial school schema: users, subjects, classes and their links, assignments, submissions, gradebook

Revision ID: 3c1a9e7d5b20
Revises:
Create Date: 2025-01-13 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1a9e7d5b20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True)


def upgrade() -> None:
    """Create every table, parents before children."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        _created_at(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'subjects',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        _created_at(),
    )
    op.create_index('ix_subjects_id', 'subjects', ['id'])
    op.create_index('ix_subjects_name', 'subjects', ['name'])
    op.create_index('ix_subjects_code', 'subjects', ['code'], unique=True)

    op.create_table(
        'classes',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('level', sa.String(), nullable=False),
        sa.Column('stream', sa.String(), nullable=True),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        _created_at(),
    )
    op.create_index('ix_classes_id', 'classes', ['id'])
    op.create_index('ix_classes_name', 'classes', ['name'])
    op.create_index('ix_classes_code', 'classes', ['code'], unique=True)

    op.create_table(
        'class_subjects',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('subject_id', sa.String(), sa.ForeignKey('subjects.id'), nullable=False),
        sa.Column('added_by', sa.String(), nullable=True),
        _created_at(),
        sa.UniqueConstraint('class_id', 'subject_id', name='uq_class_subjects_class_subject'),
    )
    op.create_index('ix_class_subjects_id', 'class_subjects', ['id'])
    op.create_index('ix_class_subjects_class_id', 'class_subjects', ['class_id'])
    op.create_index('ix_class_subjects_subject_id', 'class_subjects', ['subject_id'])

    op.create_table(
        'class_subject_teachers',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('subject_link_id', sa.String(), sa.ForeignKey('class_subjects.id'), nullable=False),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('subject_id', sa.String(), sa.ForeignKey('subjects.id'), nullable=False),
        sa.Column('teacher_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('is_lead_teacher', sa.Boolean(), nullable=False),
        sa.Column('assigned_by', sa.String(), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.UniqueConstraint('subject_link_id', 'teacher_id', name='uq_class_subject_teachers_link_teacher'),
    )
    op.create_index('ix_class_subject_teachers_id', 'class_subject_teachers', ['id'])
    op.create_index('ix_class_subject_teachers_subject_link_id', 'class_subject_teachers', ['subject_link_id'])
    op.create_index('ix_class_subject_teachers_class_id', 'class_subject_teachers', ['class_id'])
    op.create_index('ix_class_subject_teachers_subject_id', 'class_subject_teachers', ['subject_id'])
    op.create_index('ix_class_subject_teachers_teacher_id', 'class_subject_teachers', ['teacher_id'])

    op.create_table(
        'class_students',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('student_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('enrollment_type', sa.String(), nullable=False),
        sa.Column('enrollment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('enrolled_by', sa.String(), nullable=True),
        sa.UniqueConstraint('class_id', 'student_id', name='uq_class_students_class_student'),
    )
    op.create_index('ix_class_students_id', 'class_students', ['id'])
    op.create_index('ix_class_students_class_id', 'class_students', ['class_id'])
    op.create_index('ix_class_students_student_id', 'class_students', ['student_id'])

    op.create_table(
        'class_prefects',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('student_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('position', sa.String(), nullable=False),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('assigned_by', sa.String(), nullable=True),
    )
    op.create_index('ix_class_prefects_id', 'class_prefects', ['id'])
    op.create_index('ix_class_prefects_class_id', 'class_prefects', ['class_id'])
    op.create_index('ix_class_prefects_student_id', 'class_prefects', ['student_id'])

    op.create_table(
        'assignments',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('instructions', sa.String(), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_marks', sa.Float(), nullable=False),
        sa.Column('weighting', sa.Float(), nullable=True),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('subject_id', sa.String(), sa.ForeignKey('subjects.id'), nullable=False),
        sa.Column('created_by', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('assignment_type', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('visible_to_students', sa.Boolean(), nullable=False),
        sa.Column('allow_late_submissions', sa.Boolean(), nullable=False),
        sa.Column('late_penalty', sa.Float(), nullable=False),
        _created_at(),
    )
    op.create_index('ix_assignments_id', 'assignments', ['id'])
    op.create_index('ix_assignments_class_id', 'assignments', ['class_id'])
    op.create_index('ix_assignments_subject_id', 'assignments', ['subject_id'])
    op.create_index('ix_assignments_created_by', 'assignments', ['created_by'])
    op.create_index('ix_assignments_status', 'assignments', ['status'])

    op.create_table(
        'submissions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('assignment_id', sa.String(), sa.ForeignKey('assignments.id'), nullable=False),
        sa.Column('student_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.String(), nullable=True),
        sa.Column('attachments', sa.JSON(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_late', sa.Boolean(), nullable=False),
        sa.Column('late_days', sa.Integer(), nullable=False),
        sa.Column('resubmission_count', sa.Integer(), nullable=False),
        sa.Column('last_resubmitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('marks_awarded', sa.Float(), nullable=True),
        sa.Column('feedback', sa.String(), nullable=True),
        sa.Column('rubric_lines', sa.JSON(), nullable=True),
        sa.Column('graded_by', sa.String(), nullable=True),
        sa.Column('graded_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('assignment_id', 'student_id', name='uq_submissions_assignment_student'),
    )
    op.create_index('ix_submissions_id', 'submissions', ['id'])
    op.create_index('ix_submissions_assignment_id', 'submissions', ['assignment_id'])
    op.create_index('ix_submissions_student_id', 'submissions', ['student_id'])
    op.create_index('ix_submissions_status', 'submissions', ['status'])

    op.create_table(
        'gradebook_entries',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('student_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('subject_id', sa.String(), sa.ForeignKey('subjects.id'), nullable=False),
        sa.Column('teacher_id', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('academic_year', sa.String(), nullable=False),
        sa.Column('term', sa.String(), nullable=False),
        sa.Column('assignments', sa.JSON(), nullable=False),
        sa.Column('tests', sa.JSON(), nullable=False),
        sa.Column('exams', sa.JSON(), nullable=False),
        sa.Column('rubrics', sa.JSON(), nullable=False),
        sa.Column('total_marks', sa.Float(), nullable=True),
        sa.Column('final_grade', sa.String(), nullable=True),
        sa.Column('position_in_class', sa.Integer(), nullable=True),
        sa.Column('remarks', sa.String(), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.UniqueConstraint(
            'student_id', 'class_id', 'subject_id', 'academic_year', 'term',
            name='uq_gradebook_entries_student_class_subject_term',
        ),
    )
    op.create_index('ix_gradebook_entries_id', 'gradebook_entries', ['id'])
    op.create_index('ix_gradebook_entries_student_id', 'gradebook_entries', ['student_id'])
    op.create_index('ix_gradebook_entries_class_id', 'gradebook_entries', ['class_id'])
    op.create_index('ix_gradebook_entries_subject_id', 'gradebook_entries', ['subject_id'])


def downgrade() -> None:
    """Drop every table, children before parents."""
    for table in (
        'gradebook_entries',
        'submissions',
        'assignments',
        'class_prefects',
        'class_students',
        'class_subject_teachers',
        'class_subjects',
        'classes',
        'subjects',
        'users',
    ):
        op.drop_table(table)
