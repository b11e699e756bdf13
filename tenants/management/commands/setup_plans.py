"""
Management command to set up default subscription plans.
"""

from django.core.management.base import BaseCommand
from tenants.models import Plan


DEFAULT_PLANS = [
    {
        'name': 'Free',
        'slug': 'free',
        'plan_type': Plan.PlanType.FREE,
        'description': 'A single small team trying things out',
        'price_monthly': 0,
        'max_users': 3,
        'max_projects': 3,
        'sort_order': 1,
    },
    {
        'name': 'Starter',
        'slug': 'starter',
        'plan_type': Plan.PlanType.STARTER,
        'description': 'Growing teams running several projects',
        'price_monthly': 29,
        'max_users': 10,
        'max_projects': 25,
        'sort_order': 2,
    },
    {
        'name': 'Professional',
        'slug': 'professional',
        'plan_type': Plan.PlanType.PROFESSIONAL,
        'description': 'Departments with a full project portfolio',
        'price_monthly': 99,
        'max_users': 50,
        'max_projects': 200,
        'sort_order': 3,
    },
    {
        'name': 'Enterprise',
        'slug': 'enterprise',
        'plan_type': Plan.PlanType.ENTERPRISE,
        'description': 'No limits',
        'price_monthly': 399,
        'max_users': None,
        'max_projects': None,
        'sort_order': 4,
    },
]


class Command(BaseCommand):
    help = 'Create default subscription plans'

    def handle(self, *args, **options):
        created_count = 0
        updated_count = 0

        for plan_data in DEFAULT_PLANS:
            plan, created = Plan.objects.update_or_create(
                slug=plan_data['slug'],
                defaults=plan_data
            )

            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f"Created plan: {plan.name}"))
            else:
                updated_count += 1
                self.stdout.write(f"Updated plan: {plan.name}")

        self.stdout.write(self.style.SUCCESS(
            f"\nDone! Created {created_count}, updated {updated_count} plans."
        ))
