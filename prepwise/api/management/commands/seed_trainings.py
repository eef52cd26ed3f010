# prepwise/api/management/commands/seed_trainings.py
from django.core.management.base import BaseCommand

from prepwise.api.services.training_service import seed_catalogue


class Command(BaseCommand):
    help = "Loads the built-in training programme catalogue. Programmes that already exist (by title) are skipped."

    def handle(self, *args, **options):
        created, skipped = seed_catalogue()
        self.stdout.write(self.style.SUCCESS(f"Training catalogue seeded: {created} created, {skipped} skipped"))
