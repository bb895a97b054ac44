"""
Tests for the AI descriptor table and the vocabulary prefix sets.
"""

import json

from gs1_identifiers.core import (
    AIDictionary,
    AIEntry,
    IdentifierTable,
    VocabularyElement,
    get_identifier_table,
    load_ai_dictionary,
    save_ai_dictionary,
)


class TestIdentifierTable:
    """Tests for lookups on the shared table."""

    def test_lookup_by_shortcode(self):
        table = get_identifier_table()
        assert table.lookup("gtin").ai == "01"
        assert table.lookup("ser").ai == "21"
        assert table.lookup("exp").ai == "17"

    def test_lookup_by_code(self):
        entry = get_identifier_table().lookup("01")
        assert entry.shortcode == "gtin"
        assert entry.is_primary_key
        assert entry.check_digit

    def test_unknown_token(self):
        table = get_identifier_table()
        assert table.lookup("linktype") is None
        assert table.lookup("") is None

    def test_shared_instance(self):
        assert get_identifier_table() is get_identifier_table()

    def test_lookup_vocabulary(self):
        table = get_identifier_table()
        assert table.lookup_vocabulary("bizStep") is VocabularyElement.BIZ_STEP
        assert table.lookup_vocabulary("persistentDisposition") is VocabularyElement.DISPOSITION
        assert table.lookup_vocabulary("quantity") is None


class TestAIDictionary:
    """Tests for AI dictionary indexing and persistence."""

    def test_qualifiers_are_ordered(self):
        entry = get_identifier_table().lookup("01")
        assert entry.qualifiers.index("22") < entry.qualifiers.index("10") < entry.qualifiers.index("21")

    def test_alias_collision_keeps_first(self):
        dictionary = AIDictionary([
            AIEntry(ai="01", title="GTIN", shortcode="gtin", type="I"),
            AIEntry(ai="99", title="Internal", shortcode="gtin"),
        ])
        assert dictionary.get("gtin").ai == "01"
        assert dictionary.get("99").title == "Internal"
        assert len(dictionary) == 2

    def test_get_code(self):
        dictionary = AIDictionary([AIEntry(ai="10", title="Batch", shortcode="lot", type="Q")])
        assert dictionary.get_code("lot") == "10"
        assert dictionary.get_code("10") == "10"
        assert dictionary.get_code("ser") is None

    def test_duplicate_code_replaces(self):
        dictionary = AIDictionary([
            AIEntry(ai="10", title="Batch", shortcode="lot", type="Q"),
            AIEntry(ai="10", title="Batch/lot number", shortcode="lot", type="Q"),
        ])
        assert dictionary.get("lot").title == "Batch/lot number"
        assert dictionary.shortcodes() == {"lot": "10"}

    def test_json_round_trip(self, tmp_path):
        dictionary = AIDictionary([
            AIEntry(ai="00", title="SSCC", shortcode="sscc", format="N18", type="I",
                    fixed_length=True, check_digit=True, regex=r"(\d{18})"),
        ])
        path = tmp_path / "aitable.json"
        save_ai_dictionary(dictionary, path)

        loaded = load_ai_dictionary(path)
        entry = loaded.get("sscc")
        assert entry.ai == "00"
        assert entry.check_digit
        assert entry.fixed_length
        assert json.loads(path.read_text())[0]["checkDigit"] == "L"

    def test_missing_file_gives_empty_table(self, tmp_path):
        dictionary = load_ai_dictionary(tmp_path / "missing.json")
        assert len(dictionary) == 0
        assert IdentifierTable(dictionary).lookup("gtin") is None


class TestVocabularyElement:
    """Tests for vocabulary element detection."""

    def test_prefixes(self):
        prefixes = VocabularyElement.BIZ_STEP.prefixes
        assert prefixes.urn_prefix == "urn:epcglobal:cbv:bizstep:"
        assert prefixes.cbv_web_uri_prefix == "https://ref.gs1.org/cbv/BizStep-"
        assert prefixes.curie_prefix == "cbv:BizStep-"
        assert prefixes.voc_web_uri_prefix == "https://ref.gs1.org/voc/Bizstep-"

    def test_prefix_for_format(self):
        prefixes = VocabularyElement.DISPOSITION.prefixes
        assert prefixes.prefix_for("webUri") == "https://ref.gs1.org/cbv/Disp-"
        assert prefixes.prefix_for("WEBURI") == "https://ref.gs1.org/cbv/Disp-"
        assert prefixes.prefix_for("urn") == "urn:epcglobal:cbv:disp:"
        assert prefixes.prefix_for(None) == "urn:epcglobal:cbv:disp:"

    def test_for_urn(self):
        assert VocabularyElement.for_urn("urn:epcglobal:cbv:sdt:owning_party") is VocabularyElement.SOURCE_DEST_TYPE
        assert VocabularyElement.for_urn("urn:epc:id:sgtin:0614141.812345.400") is None

    def test_for_web_uri_is_case_insensitive(self):
        assert VocabularyElement.for_web_uri("https://ref.gs1.org/cbv/btt-po") is VocabularyElement.BIZ_TRANSACTION_TYPE
        assert VocabularyElement.for_web_uri("https://ref.gs1.org/voc/ER-incorrect_data") is VocabularyElement.ERROR_REASON

    def test_for_gs1_web_uri(self):
        assert VocabularyElement.for_gs1_web_uri("https://gs1.org/voc/BizStep-shipping") is VocabularyElement.BIZ_STEP
        assert VocabularyElement.for_gs1_web_uri("https://gs1.org/voc/sdt-owning_party") is VocabularyElement.SOURCE_DEST_TYPE
        assert VocabularyElement.for_gs1_web_uri("https://gs1.org/voc/MT-Temperature") is None
        assert VocabularyElement.for_web_uri("https://gs1.org/voc/BizStep-shipping") is None

    def test_for_curie(self):
        assert VocabularyElement.for_curie("cbv:Disp-active") is VocabularyElement.DISPOSITION
        assert VocabularyElement.for_curie("gs1:MT-Weight") is None

    def test_for_field(self):
        assert VocabularyElement.for_field("sourceList") is VocabularyElement.SOURCE_DEST_TYPE
        assert VocabularyElement.for_field("reason") is VocabularyElement.ERROR_REASON
        assert VocabularyElement.for_field(None) is None
