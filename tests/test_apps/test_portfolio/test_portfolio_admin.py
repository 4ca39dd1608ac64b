"""Tests for portfolio admin configuration."""

import pytest
from django.contrib import admin
from django.test import RequestFactory

from server.apps.portfolio.admin import FileAdmin, SubjectAdmin
from server.apps.portfolio.models import File, Subject


@pytest.fixture
def admin_request():
    """Bare GET request for admin methods."""
    return RequestFactory().get('/admin/')


@pytest.mark.django_db
def test_subject_admin_counts_files(subject, file_row, admin_request):
    """Changelist queryset carries the number of files per subject."""
    subject_admin = SubjectAdmin(Subject, admin.site)

    annotated = subject_admin.get_queryset(admin_request).get(id=subject.id)

    assert subject_admin.file_count(annotated) == 1


@pytest.mark.django_db
def test_file_admin_display_helpers(file_row):
    """Size and key name are rendered for humans."""
    file_admin = FileAdmin(File, admin.site)

    assert file_admin.size_display(file_row) == '2.0 KB'
    assert file_admin.key_name_display(file_row) == 'abc-essay.docx'


@pytest.mark.django_db
def test_file_admin_empty_size(file_row):
    """Zero sizes render as a dash."""
    file_row.size_bytes = 0

    assert FileAdmin(File, admin.site).size_display(file_row) == '-'


def test_file_admin_has_no_add(admin_request):
    """Rows are only created by uploads."""
    assert not FileAdmin(File, admin.site).has_add_permission(admin_request)


def test_models_registered_on_startup():
    """Admin autodiscovery registers every model when Django boots."""
    assert isinstance(admin.site.get_model_admin(Subject), SubjectAdmin)
    assert isinstance(admin.site.get_model_admin(File), FileAdmin)
