from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.db import ProgrammingError
from django.utils.text import slugify
from rest_framework.exceptions import ValidationError

from assessments.models import Assessment
from assessments.services import import_question_catalog


class Command(BaseCommand):
    help = "Import a behavioural question catalog (JSON list of {id, type, prompt, schema}) into an assessment."

    def add_arguments(self, parser):
        parser.add_argument("path", type=str, help="Path to the catalog JSON file.")
        parser.add_argument(
            "--assessment",
            required=True,
            help="Slug of the assessment receiving the questions.",
        )
        parser.add_argument(
            "--title",
            default="",
            help="Title used when the assessment does not exist yet.",
        )

    def handle(self, *args, **options):
        dataset = Path(options["path"])
        if not dataset.exists():
            raise CommandError(f"Catalog not found at {dataset}")
        try:
            entries = json.loads(dataset.read_text())
        except json.JSONDecodeError as exc:
            raise CommandError(f"Invalid JSON catalog: {exc}") from exc
        if not isinstance(entries, list):
            raise CommandError("Catalog must contain a list of questions")

        slug = slugify(options["assessment"])
        try:
            assessment, created = Assessment.objects.get_or_create(
                slug=slug,
                defaults={"title": options["title"] or slug.replace("-", " ").title()},
            )
            result = import_question_catalog(assessment=assessment, entries=entries)
        except ProgrammingError as exc:
            raise CommandError(
                "Assessment tables are missing. Run `python manage.py migrate` first."
            ) from exc
        except ValidationError as exc:
            raise CommandError(f"Invalid catalog entries: {exc.detail}") from exc

        if created:
            self.stdout.write(f"Created assessment {assessment.title!r}.")
        self.stdout.write(
            self.style.SUCCESS(
                f"Imported {result.created} new and {result.updated} existing questions into {assessment.slug}."
            )
        )
