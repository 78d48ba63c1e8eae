"""
Management command to fill in missing purchase homes.

Infers the home of every purchase recorded without one from the areas of
its line items. Purchases whose areas span several homes are left alone.

Usage:
    python manage.py backfill_home_ids
    python manage.py backfill_home_ids --dry-run
"""

from django.core.management.base import BaseCommand

from apps.analytics.services import backfill_home_ids


class Command(BaseCommand):
    help = 'Infer and store the home of purchases that have none'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        counts = backfill_home_ids(dry_run=dry_run)

        if counts['total'] == 0:
            self.stdout.write(
                self.style.SUCCESS('Every purchase already has a home. All good!')
            )
            return

        self.stdout.write(f"\nFound {counts['total']} purchase(s) without a home:\n")
        self.stdout.write(f"  - updated:   {counts['updated']}")
        self.stdout.write(f"  - skipped:   {counts['skipped']}")
        self.stdout.write(f"  - ambiguous: {counts['ambiguous']}")
        self.stdout.write(f"  - failed:    {counts['failed']}")

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        if counts['failed']:
            self.stdout.write(
                self.style.ERROR(f"\n{counts['failed']} purchase(s) failed; see the log.")
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(f"\nAssigned a home to {counts['updated']} purchase(s).")
            )
