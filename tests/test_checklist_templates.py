import os
import tempfile
import textwrap
import unittest
from unittest import mock

from morclean.checklists import resolver
from morclean.checklists.resolver import resolve
from morclean.checklists.templates import (
    DEFAULT_TEMPLATES,
    STANDARD,
    TemplateSet,
    load_templates_file,
)
from morclean.filters.rules import ServiceTag

PHOTO_TAGS = (ServiceTag.AIRBNB_TURNOVER, ServiceTag.MOVE_IN_OUT, ServiceTag.ONE_TIME)


class ChecklistResolverTests(unittest.TestCase):
    def test_every_tag_resolves_to_nonempty_template(self):
        for tag in ServiceTag:
            with self.subTest(tag=tag):
                template = resolve(tag)
                self.assertEqual(template.tag, tag)
                self.assertTrue(template.sections)
                for section in template.sections:
                    self.assertTrue(section.items, section.label)

    def test_arrival_first_and_wrap_up_last(self):
        for tag in ServiceTag:
            with self.subTest(tag=tag):
                labels = [s.label for s in resolve(tag).sections]
                self.assertTrue(labels[0].startswith("Arrival"), labels[0])
                self.assertEqual(labels[-1], "Wrap-Up")

    def test_photo_documentation_required(self):
        for tag in PHOTO_TAGS:
            with self.subTest(tag=tag):
                labels = [s.label for s in resolve(tag).sections]
                self.assertIn("Before Photos", labels)
                self.assertIn("After Photos", labels)
                self.assertLess(labels.index("Before Photos"), labels.index("After Photos"))
                photo_items = " ".join(
                    item for s in resolve(tag).sections if "Photos" in s.label for item in s.items
                )
                self.assertIn("angles", photo_items)

    def test_turnover_section_order(self):
        labels = [s.label for s in resolve(ServiceTag.AIRBNB_TURNOVER).sections]
        self.assertEqual(
            labels,
            [
                "Arrival / Intake",
                "Before Photos",
                "Linens & Beds",
                "Kitchen Reset",
                "Bathrooms",
                "Restock",
                "Staging",
                "After Photos",
                "Wrap-Up",
            ],
        )

    def test_standard_is_master_checklist(self):
        labels = [s.label for s in resolve(ServiceTag.STANDARD).sections]
        self.assertEqual(
            labels,
            ["Arrival / Safety", "Kitchen", "Bathrooms", "Bedrooms", "Common Areas", "Wrap-Up"],
        )

    def test_deep_clean_adds_detail_section(self):
        labels = [s.label for s in resolve(ServiceTag.DEEP_CLEAN).sections]
        self.assertIn("Deep Clean", labels)

    def test_missing_entry_falls_back_to_standard(self):
        partial = {ServiceTag.STANDARD: STANDARD}
        self.assertIs(resolve(ServiceTag.OFFICE_COMMERCIAL, partial), STANDARD)

    def test_idempotent(self):
        first = resolve(ServiceTag.MOVE_IN_OUT)
        for _ in range(3):
            self.assertEqual(resolve(ServiceTag.MOVE_IN_OUT), first)

    def test_template_set_is_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_TEMPLATES[ServiceTag.STANDARD] = STANDARD  # type: ignore[index]

    def test_template_set_requires_every_tag(self):
        with self.assertRaises(ValueError):
            TemplateSet({ServiceTag.STANDARD: STANDARD})


class TemplatesFileTests(unittest.TestCase):
    def _write(self, body: str) -> str:
        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(textwrap.dedent(body))
        self.addCleanup(os.remove, path)
        return path

    def test_override_single_tag(self):
        path = self._write(
            """
            OfficeCommercial:
              name: Office (night crew)
              sections:
                - label: Arrival / Access
                  items: [Badge in]
                - label: Wrap-Up
                  items: [Lock up]
            """
        )
        templates = load_templates_file(path)
        office = resolve(ServiceTag.OFFICE_COMMERCIAL, templates)
        self.assertEqual(office.name, "Office (night crew)")
        self.assertEqual([s.label for s in office.sections], ["Arrival / Access", "Wrap-Up"])
        # untouched tags keep the built-ins
        self.assertEqual(resolve(ServiceTag.DEEP_CLEAN, templates), resolve(ServiceTag.DEEP_CLEAN))

    def test_unknown_tag_rejected(self):
        path = self._write(
            """
            Windows:
              sections:
                - label: Arrival
                  items: [x]
            """
        )
        with self.assertRaises(ValueError):
            load_templates_file(path)

    def test_invalid_yaml_is_value_error(self):
        path = self._write("Standard: [unclosed\n")
        with self.assertRaises(ValueError):
            load_templates_file(path)

    def test_override_must_open_with_arrival_and_close_with_wrap_up(self):
        path = self._write(
            """
            Standard:
              sections:
                - label: Kitchen
                  items: [Counters wiped]
            """
        )
        with self.assertRaisesRegex(ValueError, "arrival"):
            load_templates_file(path)

        path = self._write(
            """
            Standard:
              sections:
                - label: Arrival / Safety
                  items: [Park legally]
                - label: Kitchen
                  items: [Counters wiped]
            """
        )
        with self.assertRaisesRegex(ValueError, "wrap-up"):
            load_templates_file(path)

    def test_turnover_override_needs_photo_sections(self):
        path = self._write(
            """
            AirbnbTurnover:
              sections:
                - label: Arrival / Intake
                  items: [Confirm checkout]
                - label: Before Photos
                  items: [2 angles per room]
                - label: Wrap-Up
                  items: [Lock up]
            """
        )
        with self.assertRaisesRegex(ValueError, "after photos"):
            load_templates_file(path)

    def test_empty_or_null_items_rejected(self):
        for items in ("[]", "[null]", "[' ']"):
            with self.subTest(items=items):
                path = self._write(
                    f"""
                    DeepClean:
                      sections:
                        - label: Arrival
                          items: [Park]
                        - label: Wrap-Up
                          items: {items}
                    """
                )
                with self.assertRaises(ValueError):
                    load_templates_file(path)

    def test_template_without_sections_rejected(self):
        path = self._write(
            """
            Standard:
              name: Empty
              sections: []
            """
        )
        with self.assertRaises(ValueError):
            load_templates_file(path)


class ActiveTemplatesTests(unittest.TestCase):
    def test_bad_override_file_raises_value_error(self):
        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("Standard: [unclosed\n")
        self.addCleanup(os.remove, path)

        with mock.patch.dict(os.environ, {"MORCLEAN_TEMPLATES_FILE": path}), \
                mock.patch.object(resolver, "_ACTIVE", None):
            with self.assertRaises(ValueError):
                resolver.active_templates()

    def test_builtins_when_no_override(self):
        with mock.patch.dict(os.environ, {"MORCLEAN_TEMPLATES_FILE": ""}), \
                mock.patch.object(resolver, "_ACTIVE", None):
            self.assertIs(resolver.active_templates(), DEFAULT_TEMPLATES)


if __name__ == "__main__":
    unittest.main()
