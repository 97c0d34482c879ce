from __future__ import annotations

from django.core.management.base import BaseCommand

from hotel.seed import seed_default_rooms


class Command(BaseCommand):
    help = "Seed the default room inventory (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--update-existing",
            action="store_true",
            help="Update existing rooms to match the default seed values.",
        )

    def handle(self, *args, **options):
        result = seed_default_rooms(update_existing=options["update_existing"])
        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: created={result['created']} updated={result['updated']} skipped={result['skipped']}"
            )
        )
