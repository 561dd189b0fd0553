import unittest

from app.schemas.common import MessageResponse
from app.schemas.disease import DiseaseQueryResponse
from app.services.disease_service import (
    NOT_FOUND_MESSAGE,
    DiseaseService,
    QueryValidationError,
    to_disease_answer,
)
from app.services.search_service import DiseaseLookupError
from fakes import seeded_store


class ParseQueryTests(unittest.TestCase):
    def test_rejects_unusable_payloads(self):
        for payload in (None, {}, {"query": ""}, {"query": "   "}, {"query": 123}, {"query": None}, ["fever"], "fever"):
            with self.subTest(payload=payload):
                with self.assertRaises(QueryValidationError):
                    DiseaseService.parse_query(payload)

    def test_trims_accepted_query(self):
        self.assertEqual(DiseaseService.parse_query({"query": "  fever \n"}), "fever")

    def test_ignores_extra_fields(self):
        self.assertEqual(DiseaseService.parse_query({"query": "cough", "lang": "en"}), "cough")


class ToDiseaseAnswerTests(unittest.TestCase):
    def test_splits_list_fields(self):
        answer = to_disease_answer(
            {
                "Disease Name": "Influenza",
                "Symptoms": "Fever;Cough",
                "Treatment Options": "Rest;Hydration;Medication",
                "Medicine Options": "Oseltamivir",
            }
        )
        self.assertEqual(answer.name, "Influenza")
        self.assertEqual(answer.symptoms, ["Fever", "Cough"])
        self.assertEqual(answer.treatments, ["Rest", "Hydration", "Medication"])
        self.assertEqual(answer.medicines, ["Oseltamivir"])

    def test_defaults_for_missing_fields(self):
        answer = to_disease_answer({"Causes": "unknown", "Medicine Options": ""})
        self.assertEqual(answer.name, "Unknown Disease")
        self.assertEqual(answer.symptoms, ["Not specified"])
        self.assertEqual(answer.treatments, ["Not specified"])
        self.assertEqual(answer.medicines, ["Not specified"])

    def test_pieces_are_kept_verbatim(self):
        answer = to_disease_answer({"Disease Name": "X", "Symptoms": "Fever; Cough;"})
        self.assertEqual(answer.symptoms, ["Fever", " Cough", ""])


class AnswerQueryTests(unittest.TestCase):
    def test_found(self):
        res = DiseaseService.answer_query(seeded_store(), {"query": " Malaria "})

        self.assertIsInstance(res, DiseaseQueryResponse)
        self.assertTrue(res.success)
        self.assertEqual(res.data.name, "Malaria")
        self.assertEqual(res.data.medicines, ["Chloroquine", "Artemisinin"])

    def test_only_first_row_is_answered(self):
        # both Dengue and Influenza match "fever" in the symptoms tier
        res = DiseaseService.answer_query(seeded_store(), {"query": "fever"})
        self.assertEqual(res.data.name, "Dengue")

    def test_not_found(self):
        res = DiseaseService.answer_query(seeded_store(), {"query": "xyzzy"})

        self.assertIsInstance(res, MessageResponse)
        self.assertFalse(res.success)
        self.assertEqual(res.message, NOT_FOUND_MESSAGE)

    def test_invalid_payload_never_reaches_store(self):
        sb = seeded_store()
        with self.assertRaises(QueryValidationError):
            DiseaseService.answer_query(sb, {"query": "  "})
        self.assertEqual(sb.executed, [])

    def test_lookup_error_propagates(self):
        sb = seeded_store()
        sb.failing_columns.add("Disease Name")
        with self.assertRaises(DiseaseLookupError):
            DiseaseService.answer_query(sb, {"query": "fever"})


if __name__ == "__main__":
    unittest.main()
