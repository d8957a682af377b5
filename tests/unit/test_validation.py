import pytest

from qacorpus.core.exceptions import DocumentValidationError
from qacorpus.models import FaqDocument, QAPairDocument, ReversePromptDocument
from qacorpus.validation import (
    INVALID_BATCH_MESSAGE,
    Schema,
    missing_fields,
    parse_batch,
    required_fields,
    validate_batch,
    validate_document,
)


class TestRequiredFields:
    def test_faq_order(self, faq_document):
        assert required_fields(faq_document) == ("type", "context", "category", "prompt", "response")

    def test_reverse_prompt_order(self, reverse_prompt_document):
        assert required_fields(reverse_prompt_document) == (
            "type",
            "context",
            "category",
            "prompt",
            "name",
            "action",
            "next-prompt",
        )

    def test_generic_qa_needs_prompt_and_response_only(self):
        assert required_fields({}, Schema.QA) == ("prompt", "response")


class TestValidateDocument:
    def test_valid_documents_pass(self, faq_document, reverse_prompt_document, qa_document):
        assert validate_document(faq_document) is None
        assert validate_document(reverse_prompt_document) is None
        assert validate_document(qa_document, Schema.QA) is None

    @pytest.mark.parametrize("field", ["type", "context", "category", "prompt", "response"])
    def test_faq_missing_field_is_named(self, faq_document, field):
        del faq_document[field]
        with pytest.raises(DocumentValidationError) as excinfo:
            validate_document(faq_document)
        assert field in excinfo.value.message
        assert excinfo.value.fields[0] == field

    @pytest.mark.parametrize("field", ["name", "action", "next-prompt"])
    def test_reverse_prompt_missing_field_is_named(self, reverse_prompt_document, field):
        reverse_prompt_document[field] = "   "
        with pytest.raises(DocumentValidationError) as excinfo:
            validate_document(reverse_prompt_document)
        assert excinfo.value.message == f"Missing required field: {field}"

    def test_first_missing_field_follows_check_order(self, reverse_prompt_document):
        del reverse_prompt_document["action"]
        del reverse_prompt_document["category"]
        with pytest.raises(DocumentValidationError) as excinfo:
            validate_document(reverse_prompt_document)
        assert excinfo.value.message == "Missing required field: category"
        assert excinfo.value.fields == ["category", "action"]

    def test_unsupported_type_is_rejected(self, faq_document):
        faq_document["type"] = "essay"
        with pytest.raises(DocumentValidationError) as excinfo:
            validate_document(faq_document)
        assert "unsupported type 'essay'" in excinfo.value.message

    def test_empty_string_counts_as_missing(self, qa_document):
        qa_document["response"] = ""
        assert missing_fields(qa_document, Schema.QA) == ["response"]

    def test_non_object_is_rejected(self):
        with pytest.raises(DocumentValidationError):
            validate_document(["prompt"], Schema.QA)


class TestValidateBatch:
    @pytest.mark.parametrize("documents", [None, [], {"prompt": "x"}, "documents"])
    def test_missing_or_invalid_array(self, documents):
        with pytest.raises(DocumentValidationError) as excinfo:
            validate_batch(documents)
        assert excinfo.value.message == INVALID_BATCH_MESSAGE

    def test_reports_offending_index_and_fields(self, faq_document, reverse_prompt_document):
        del reverse_prompt_document["name"]
        del reverse_prompt_document["next-prompt"]
        with pytest.raises(DocumentValidationError) as excinfo:
            validate_batch([faq_document, reverse_prompt_document])

        error = excinfo.value
        assert error.index == 2
        assert error.fields == ["name", "next-prompt"]
        assert error.message == "Document 2 (reverse-prompt) missing required fields: name, next-prompt"


class TestParseBatch:
    def test_discriminates_on_type(self, faq_document, reverse_prompt_document):
        parsed = parse_batch([faq_document, reverse_prompt_document])

        assert isinstance(parsed[0], FaqDocument)
        assert isinstance(parsed[1], ReversePromptDocument)
        assert parsed[1].to_record()["next-prompt"] == "What did you eat?"

    def test_blank_optionals_become_null(self, faq_document):
        faq_document.update({"subcategory": "  ", "source": "", "attribution": "Dr. Who"})
        record = parse_batch([faq_document])[0].to_record()

        assert record["subcategory"] is None
        assert record["source"] is None
        assert record["attribution"] == "Dr. Who"

    def test_qa_metadata_is_recomputed(self, qa_document):
        qa_document["training_metadata"] = {"prompt_tokens": 1, "response_tokens": 1, "total_tokens": 50, "weighting": 3}
        document = parse_batch([qa_document], Schema.QA)[0]

        assert isinstance(document, QAPairDocument)
        metadata = document.to_record()["training_metadata"]
        assert metadata["prompt_tokens"] == 8
        assert metadata["response_tokens"] == 11
        assert metadata["total_tokens"] == 19
        assert metadata["weighting"] == 5

    def test_malformed_field_reports_index(self, faq_document):
        bad = dict(faq_document, prompt=123)
        with pytest.raises(DocumentValidationError) as excinfo:
            parse_batch([faq_document, bad])
        assert excinfo.value.index == 2
        assert "prompt" in excinfo.value.message
