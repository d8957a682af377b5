import pytest

from qacorpus.core.exceptions import DocumentValidationError
from qacorpus.shaping import DocumentShaper, PendingBatch, form_fields, has_unsaved_data, schema_for
from qacorpus.validation import Schema


@pytest.fixture
def shaper():
    return DocumentShaper()


@pytest.fixture
def faq_form():
    return {
        "type": "faq",
        "context": "nutrition",
        "category": "basics",
        "subcategory": "",
        "prompt": "  What is protein?  ",
        "response": "A macronutrient.",
        "action": "ignored",
        "source": "   ",
        "attribution": "Dietitian",
    }


class TestDocumentShaper:
    def test_faq_shape(self, shaper, faq_form):
        document = shaper.shape(faq_form)

        assert document == {
            "type": "faq",
            "context": "nutrition",
            "category": "basics",
            "subcategory": None,
            "prompt": "What is protein?",
            "response": "A macronutrient.",
            "source": None,
            "attribution": "Dietitian",
        }
        assert schema_for(document) is Schema.PROMPTME

    def test_reverse_prompt_shape(self, shaper):
        document = shaper.shape(
            {
                "type": "reverse-prompt",
                "name": "log-meal",
                "context": "tracking",
                "category": "meals",
                "prompt": "I just had lunch",
                "response": "not part of this shape",
                "action": "open_meal_logger",
                "next-prompt": "What did you eat?",
            }
        )

        assert document["name"] == "log-meal"
        assert document["next-prompt"] == "What did you eat?"
        assert "response" not in document

    @pytest.mark.parametrize("selected", ["qa", "", None])
    def test_generic_qa_shape(self, shaper, selected):
        document = shaper.shape({"type": selected, "prompt": "abcdefg", "response": "abcd", "source": ""})

        assert "type" not in document
        assert document["source"] is None
        assert document["training_metadata"] == {
            "prompt_tokens": 2,
            "response_tokens": 1,
            "total_tokens": 3,
            "weighting": 5,
        }
        assert schema_for(document) is Schema.QA

    def test_form_round_trip_for_editing(self, shaper, faq_form):
        fields = form_fields(shaper.shape(faq_form))

        assert fields["prompt"] == "What is protein?"
        assert fields["source"] == ""
        assert fields["type"] == "faq"

    def test_unsaved_data_ignores_session_fields(self):
        assert not has_unsaved_data({"type": "faq", "context": "nutrition", "category": "basics", "prompt": " "})
        assert has_unsaved_data({"type": "faq", "attribution": "someone"})


class TestPendingBatch:
    def test_append_validates_before_pushing(self, shaper, faq_form):
        batch = PendingBatch()
        faq_form["response"] = ""

        with pytest.raises(DocumentValidationError) as excinfo:
            batch.append(shaper.shape(faq_form))

        assert excinfo.value.message == "Missing required field: response"
        assert len(batch) == 0

    def test_remove_for_edit_returns_document(self, shaper, faq_form):
        batch = PendingBatch()
        first = shaper.shape(faq_form)
        second = shaper.shape(dict(faq_form, prompt="What is fibre?"))
        batch.append(first)
        batch.append(second)

        removed = batch.remove_for_edit(0)

        assert removed == first
        assert batch.documents == [second]

    def test_remove_for_edit_out_of_range(self):
        with pytest.raises(IndexError):
            PendingBatch().remove_for_edit(0)

    def test_clear_and_payload(self, shaper):
        batch = PendingBatch(Schema.QA)
        batch.append(shaper.shape({"type": "qa", "prompt": "p", "response": "r"}))

        assert len(batch.payload()["documents"]) == 1
        batch.clear()
        assert batch.payload() == {"documents": []}

    def test_documents_are_copies(self, shaper, faq_form):
        batch = PendingBatch()
        batch.append(shaper.shape(faq_form))
        batch.documents[0]["prompt"] = "changed"

        assert batch.documents[0]["prompt"] == "What is protein?"
