"""
ProjectHub Test Configuration - pytest fixtures and factories

This module provides:
- factory_boy factories for users, plans, tenants, memberships, projects and tasks
- Shared fixtures for role-based and tenant isolation testing
- API clients bound to a tenant through the X-Tenant-ID header

RUNNING TESTS:
# Run all tests
pytest -v

# Run by app
pytest projects/tests -v
pytest tenants/tests -v
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone

import factory
from factory import fuzzy
from factory.django import DjangoModelFactory


# ============================================================================
# USER FACTORIES
# ============================================================================

class UserFactory(DjangoModelFactory):
    """Factory for the auth User model."""

    class Meta:
        model = 'auth.User'
        django_get_or_create = ('username',)

    username = factory.LazyAttribute(lambda o: f"user_{uuid.uuid4().hex[:8]}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    is_active = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Hash the password instead of storing it raw."""
        password = kwargs.pop('password', 'testpass123')
        user = super()._create(model_class, *args, **kwargs)
        user.set_password(password)
        user.save()
        return user


# ============================================================================
# TENANT FACTORIES
# ============================================================================

class PlanFactory(DjangoModelFactory):
    """Factory for subscription plans."""

    class Meta:
        model = 'tenants.Plan'
        django_get_or_create = ('slug',)

    name = factory.Sequence(lambda n: f"Plan {n}")
    slug = factory.Sequence(lambda n: f"plan-{n}")
    plan_type = 'professional'
    description = factory.Faker('text', max_nb_chars=200)

    price_monthly = Decimal('29.99')
    currency = 'USD'

    max_users = 50
    max_projects = 200

    is_active = True
    sort_order = 0


class FreePlanFactory(PlanFactory):
    """Factory for the free plan."""

    name = 'Free'
    slug = 'free'
    plan_type = 'free'
    price_monthly = Decimal('0.00')
    max_users = 3
    max_projects = 3


class TenantFactory(DjangoModelFactory):
    """Factory for tenants (organizations)."""

    class Meta:
        model = 'tenants.Tenant'
        django_get_or_create = ('slug',)

    name = factory.Faker('company')
    slug = factory.Sequence(lambda n: f"tenant-{n}")
    status = 'active'
    plan = factory.SubFactory(PlanFactory)
    on_trial = False
    trial_ends_at = None
    owner_email = factory.Faker('company_email')


class TrialTenantFactory(TenantFactory):
    """Factory for tenants still in their trial."""

    status = 'trial'
    on_trial = True
    trial_ends_at = factory.LazyFunction(lambda: timezone.now() + timedelta(days=14))


class TenantUserFactory(DjangoModelFactory):
    """Factory for tenant memberships."""

    class Meta:
        model = 'accounts.TenantUser'

    user = factory.SubFactory(UserFactory)
    tenant = factory.SubFactory(TenantFactory)
    role = 'member'
    job_title = factory.Faker('job')
    is_active = True
    is_primary_tenant = True


# ============================================================================
# PROJECT FACTORIES
# ============================================================================

class ProjectFactory(DjangoModelFactory):
    """Factory for projects."""

    class Meta:
        model = 'projects.Project'

    tenant = factory.SubFactory(TenantFactory)
    name = factory.Faker('catch_phrase')
    description = factory.Faker('paragraph')
    status = 'ACTIVE'
    budget = Decimal('10000.00')
    actual_cost = Decimal('0.00')
    start_date = factory.LazyFunction(lambda: timezone.localdate() - timedelta(days=30))
    end_date = factory.LazyFunction(lambda: timezone.localdate() + timedelta(days=60))


class TaskFactory(DjangoModelFactory):
    """Factory for tasks. The task follows its project's tenant."""

    class Meta:
        model = 'projects.Task'

    project = factory.SubFactory(ProjectFactory)
    tenant = factory.LazyAttribute(lambda o: o.project.tenant if o.project else TenantFactory())
    title = factory.Faker('sentence', nb_words=4)
    description = factory.Faker('paragraph')
    priority = fuzzy.FuzzyChoice(['LOW', 'MEDIUM', 'HIGH', 'CRITICAL'])
    status = 'TODO'
    estimated_hours = Decimal('8.00')
    actual_hours = Decimal('0.00')
    due_date = factory.LazyFunction(lambda: timezone.localdate() + timedelta(days=7))
    assigned_to = ''


# ============================================================================
# FACTORY FIXTURES
# ============================================================================

@pytest.fixture
def user_factory(db):
    """Provide UserFactory for tests."""
    return UserFactory


@pytest.fixture
def plan_factory(db):
    """Provide PlanFactory for tests."""
    return PlanFactory


@pytest.fixture
def free_plan_factory(db):
    """Provide FreePlanFactory for tests."""
    return FreePlanFactory


@pytest.fixture
def tenant_factory(db):
    """Provide TenantFactory for tests."""
    return TenantFactory


@pytest.fixture
def trial_tenant_factory(db):
    """Provide TrialTenantFactory for tests."""
    return TrialTenantFactory


@pytest.fixture
def tenant_user_factory(db):
    """Provide TenantUserFactory for tests."""
    return TenantUserFactory


@pytest.fixture
def project_factory(db):
    """Provide ProjectFactory for tests."""
    return ProjectFactory


@pytest.fixture
def task_factory(db):
    """Provide TaskFactory for tests."""
    return TaskFactory


# ============================================================================
# COMMON FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def clear_tenant_cache():
    """Tenant lookups are cached by id; start every test with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def plan(db):
    """Create a professional plan."""
    return PlanFactory()


@pytest.fixture
def tenant(db, plan):
    """Create an active tenant with a plan."""
    return TenantFactory(plan=plan)


@pytest.fixture
def other_tenant(db, plan):
    """A second tenant, for isolation tests."""
    return TenantFactory(plan=plan)


@pytest.fixture
def user(db):
    """Create a user with no membership."""
    return UserFactory()


def _member(tenant, role):
    return TenantUserFactory(tenant=tenant, role=role, user=UserFactory(username=f"{role}_{uuid.uuid4().hex[:6]}"))


@pytest.fixture
def owner(db, tenant):
    """Membership with the OWNER role in `tenant`."""
    return _member(tenant, 'owner')


@pytest.fixture
def manager(db, tenant):
    """Membership with the MANAGER role in `tenant`."""
    return _member(tenant, 'manager')


@pytest.fixture
def member(db, tenant):
    """Membership with the MEMBER role in `tenant`."""
    return _member(tenant, 'member')


@pytest.fixture
def viewer(db, tenant):
    """Membership with the VIEWER role in `tenant`."""
    return _member(tenant, 'viewer')


@pytest.fixture
def project(db, tenant):
    """A budgeted project in `tenant`."""
    return ProjectFactory(tenant=tenant)


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client(db):
    """Provide a DRF API test client."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def client_for(db):
    """
    Build an API client authenticated as a membership's user and bound to
    the membership's tenant through the X-Tenant-ID header.

    Usage:
        client = client_for(manager)
    """
    from rest_framework.test import APIClient

    def make(membership, header=True):
        client = APIClient()
        client.force_authenticate(user=membership.user)
        if header:
            client.credentials(HTTP_X_TENANT_ID=str(membership.tenant.uuid))
        return client

    return make


@pytest.fixture
def manager_client(client_for, manager):
    return client_for(manager)


@pytest.fixture
def member_client(client_for, member):
    return client_for(member)


@pytest.fixture
def viewer_client(client_for, viewer):
    return client_for(viewer)
