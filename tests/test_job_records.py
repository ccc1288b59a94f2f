import unittest

from morclean.core.normalize import JobRecord, coerce_jobs, events_from_payload


class JobRecordTests(unittest.TestCase):
    def test_defaults(self):
        job = JobRecord.model_validate({"date": "2025-10-15"})
        self.assertEqual(job.title, "")
        self.assertEqual(job.client, "")
        self.assertEqual(job.tasks, ())

    def test_none_and_numbers_coerced(self):
        job = JobRecord.model_validate({"id": 42, "client": None, "price": 120.5, "title": "  Clean  "})
        self.assertEqual(job.id, "42")
        self.assertEqual(job.client, "")
        self.assertEqual(job.price, "120.5")
        self.assertEqual(job.title, "Clean")

    def test_tasks_from_pipe_string(self):
        job = JobRecord.model_validate({"tasks": "Oven|| Fridge |"})
        self.assertEqual(job.tasks, ("Oven", "Fridge"))

    def test_unknown_keys_ignored(self):
        job = JobRecord.model_validate({"title": "Clean", "color": "blue"})
        self.assertFalse(hasattr(job, "color"))

    def test_service_type_preferred_over_title(self):
        job = JobRecord.model_validate({"title": "Clean", "service_type": "Airbnb Turnover"})
        self.assertEqual(job.classification_text, "Airbnb Turnover")

    def test_title_used_when_service_type_blank(self):
        job = JobRecord.model_validate({"title": "Deep Clean", "service_type": "  "})
        self.assertEqual(job.classification_text, "Deep Clean")

    def test_records_are_immutable(self):
        job = JobRecord.model_validate({"title": "Clean"})
        with self.assertRaises(Exception):
            job.title = "Other"  # type: ignore[misc]


class EventsPayloadTests(unittest.TestCase):
    def test_events_list(self):
        jobs = events_from_payload({"events": [{"title": "A"}, {"title": "B"}]})
        self.assertEqual([j.title for j in jobs], ["A", "B"])

    def test_malformed_payloads_degrade_to_empty(self):
        for payload in (None, [], "oops", {}, {"events": None}, {"events": {"title": "A"}}):
            with self.subTest(payload=payload):
                self.assertEqual(events_from_payload(payload), [])

    def test_non_object_events_dropped(self):
        jobs = coerce_jobs([{"title": "A"}, "junk", 3, None])
        self.assertEqual(len(jobs), 1)


if __name__ == "__main__":
    unittest.main()
