import unittest

from morclean.filters.rules import ServiceTag, classify, parse_tag


class ServiceClassifierTests(unittest.TestCase):
    def test_airbnb_keywords(self):
        for title in ("Airbnb Turnover", "AIRBNB clean", "Guest turnover", "BnB reset"):
            with self.subTest(title=title):
                self.assertEqual(classify(title), ServiceTag.AIRBNB_TURNOVER)

    def test_airbnb_beats_deep(self):
        self.assertEqual(classify("Airbnb Deep Clean"), ServiceTag.AIRBNB_TURNOVER)

    def test_turnover_beats_move_out(self):
        self.assertEqual(classify("Move-out turnover"), ServiceTag.AIRBNB_TURNOVER)

    def test_post_construction(self):
        self.assertEqual(classify("Post-Construction Clean"), ServiceTag.POST_CONSTRUCTION)

    def test_construction_beats_deep(self):
        self.assertEqual(classify("Deep construction cleanup"), ServiceTag.POST_CONSTRUCTION)

    def test_move_in_and_move_out_collapse(self):
        for title in ("Move-In Clean", "move in", "Move Out Clean", "MOVE-OUT deep"):
            with self.subTest(title=title):
                self.assertEqual(classify(title), ServiceTag.MOVE_IN_OUT)

    def test_listing_prep(self):
        self.assertEqual(classify("Listing Prep"), ServiceTag.LISTING_PREP)
        self.assertEqual(classify("Real Estate showing clean"), ServiceTag.LISTING_PREP)

    def test_office_commercial(self):
        self.assertEqual(classify("Office Cleaning"), ServiceTag.OFFICE_COMMERCIAL)
        self.assertEqual(classify("Commercial - weekly"), ServiceTag.OFFICE_COMMERCIAL)

    def test_one_time(self):
        self.assertEqual(classify("One Time Clean"), ServiceTag.ONE_TIME)
        self.assertEqual(classify("one-time"), ServiceTag.ONE_TIME)

    def test_one_time_beats_deep(self):
        self.assertEqual(classify("One-Time Deep Clean"), ServiceTag.ONE_TIME)

    def test_deep_clean(self):
        self.assertEqual(classify("Deep Clean"), ServiceTag.DEEP_CLEAN)

    def test_deep_substring_quirk(self):
        # no word boundaries: "deepwater" still counts as deep
        self.assertEqual(classify("Deepwater Lane weekly"), ServiceTag.DEEP_CLEAN)

    def test_defaults_to_standard(self):
        for title in (None, "", "   ", "Standard Clean", "Clean", "Biweekly"):
            with self.subTest(title=title):
                self.assertEqual(classify(title), ServiceTag.STANDARD)

    def test_repeatable(self):
        results = {classify("Airbnb Turnover") for _ in range(5)}
        self.assertEqual(results, {ServiceTag.AIRBNB_TURNOVER})

    def test_parse_tag(self):
        self.assertEqual(parse_tag("airbnbturnover"), ServiceTag.AIRBNB_TURNOVER)
        self.assertEqual(parse_tag("DeepClean"), ServiceTag.DEEP_CLEAN)
        self.assertIsNone(parse_tag("Windows"))
        self.assertIsNone(parse_tag(None))


if __name__ == "__main__":
    unittest.main()
