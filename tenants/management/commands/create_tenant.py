"""
Management command to create a new tenant.
"""

from django.core.management.base import BaseCommand, CommandError
from django.core.validators import validate_email
from django.core.exceptions import ValidationError

from tenants.models import Plan
from tenants.services import TenantService


class Command(BaseCommand):
    help = 'Create a new tenant on a subscription plan'

    def add_arguments(self, parser):
        parser.add_argument('name', type=str, help='Tenant/Organization name')
        parser.add_argument('owner_email', type=str, help='Owner email address')
        parser.add_argument(
            '--plan',
            type=str,
            default='free',
            help='Plan slug (default: free)'
        )
        parser.add_argument(
            '--skip-trial',
            action='store_true',
            help='Skip trial period and activate immediately'
        )

    def handle(self, *args, **options):
        name = options['name']
        owner_email = options['owner_email']
        plan_slug = options.get('plan')
        skip_trial = options.get('skip_trial', False)

        try:
            validate_email(owner_email)
        except ValidationError:
            raise CommandError(f"Invalid email address: {owner_email}")

        plan = None
        if plan_slug:
            try:
                plan = Plan.objects.get(slug=plan_slug, is_active=True)
            except Plan.DoesNotExist:
                self.stdout.write(
                    self.style.WARNING(f"Plan '{plan_slug}' not found, using default")
                )

        self.stdout.write(f"Creating tenant: {name}")

        tenant = TenantService.create_tenant(
            name=name,
            owner_email=owner_email,
            plan=plan,
            skip_trial=skip_trial,
        )

        if skip_trial:
            self.stdout.write(self.style.SUCCESS("Trial skipped, tenant activated"))

        self.stdout.write(self.style.SUCCESS(f"""
Tenant created successfully!

Name: {tenant.name}
Slug: {tenant.slug}
UUID: {tenant.uuid}
Status: {tenant.get_status_display()}
Owner: {tenant.owner_email}
Plan: {tenant.plan.name if tenant.plan else 'None'}
Trial ends: {tenant.trial_ends_at.strftime('%Y-%m-%d') if tenant.trial_ends_at else 'N/A'}
"""))
