from parsers.attributes import apply_attribute
from parsers.records import new_document
from parsers.text_content import apply_text

OBSERVATION_PATH = ("clinicaldocument", "entry", "observation", "code")


def test_gender_and_birth_time_attributes():
    document = new_document("doc.xml")

    apply_attribute(document, "administrativegendercode", "code", "female", ("patient", "administrativegendercode"))
    apply_attribute(document, "birthtime", "value", "19800101", ("patient", "birthtime"))

    assert document["patient"]["gender"] == "F"
    assert document["patient"]["birth_date"] == "19800101"
    assert document["patient"]["age"] == 44


def test_birth_time_uses_reference_year():
    document = new_document("doc.xml")

    apply_attribute(document, "birthtime", "value", "19800101", ("birthtime",), reference_year=2030)

    assert document["patient"]["age"] == 50


def test_year_month_birth_time_yields_age():
    document = new_document("doc.xml")

    apply_attribute(document, "birthtime", "value", "198001", ("patient", "birthtime"))

    assert document["patient"]["birth_date"] == "198001"
    assert document["patient"]["age"] == 44


def test_unparsable_birth_time_leaves_age_unset():
    document = new_document("doc.xml")

    apply_attribute(document, "birthtime", "value", "unknown-date", ("birthtime",))

    assert document["patient"]["birth_date"] == "unknown-date"
    assert document["patient"]["age"] is None


def test_effective_time_only_near_document_root():
    document = new_document("doc.xml")

    apply_attribute(document, "effectivetime", "value", "20240101", ("clinicaldocument", "effectivetime"))
    apply_attribute(
        document,
        "effectivetime",
        "value",
        "19990101",
        ("clinicaldocument", "component", "section", "effectivetime"),
    )

    assert document["document_date"] == "20240101"


def test_display_name_before_code_pairs_on_one_diagnosis():
    document = new_document("doc.xml")

    apply_attribute(document, "code", "displayname", "Asma bronquial", OBSERVATION_PATH)
    apply_attribute(document, "code", "code", "J45", OBSERVATION_PATH)

    assert document["diagnoses"] == [
        {"code": "J45", "name": "Asma bronquial", "code_system": None}
    ]


def test_code_before_display_name_is_not_paired():
    document = new_document("doc.xml")

    apply_attribute(document, "code", "code", "J45", OBSERVATION_PATH)
    apply_attribute(document, "code", "displayname", "Asma bronquial", OBSERVATION_PATH)

    assert document["diagnoses"] == [
        {"code": None, "name": "Asma bronquial", "code_system": None}
    ]


def test_code_outside_diagnosis_context_is_ignored():
    document = new_document("doc.xml")

    apply_attribute(document, "code", "displayname", "Summary", ("clinicaldocument", "code"))

    assert document["diagnoses"] == []


def test_diagnosis_context_matches_partial_element_names():
    document = new_document("doc.xml")

    apply_attribute(document, "code", "displayname", "Gastritis", ("section", "problemact", "code"))
    apply_attribute(document, "code", "displayname", "Asma", ("section", "conditions", "code"))

    assert [d["name"] for d in document["diagnoses"]] == ["Gastritis", "Asma"]


def test_patient_id_requires_patient_element():
    document = new_document("doc.xml")

    apply_attribute(document, "id", "extension", "ROLE-1", ("recordtarget", "patientrole", "id"))
    assert document["patient"]["id"] is None

    apply_attribute(document, "id", "extension", "PAT-1", ("patientrole", "patient", "id"))
    assert document["patient"]["id"] == "PAT-1"


def test_unknown_attribute_pair_is_ignored():
    document = new_document("doc.xml")

    assert apply_attribute(document, "section", "classcode", "DOCSECT", ("section",)) is False
    assert document == new_document("doc.xml")


def test_given_and_family_build_patient_name():
    document = new_document("doc.xml")
    path = ("patient", "name")

    apply_text(document, "given", "Ana", path + ("given",))
    apply_text(document, "family", "Ruiz", path + ("family",))
    apply_text(document, "given", "Ignored", ("guardian", "name", "given"))

    assert document["patient"]["name"] == "Ana Ruiz"


def test_name_in_assigned_person_sets_author():
    document = new_document("doc.xml")

    apply_text(document, "name", "Dr. Pérez", ("author", "assignedauthor", "assignedperson", "name"))

    assert document["author"] == "Dr. Pérez"
    assert document["medications"] == []


def test_medication_names_are_normalized_and_deduplicated():
    document = new_document("doc.xml")
    path = ("manufacturedproduct", "manufacturedmaterial", "name")

    apply_text(document, "name", "metformin", path)
    apply_text(document, "name", "METFORMINA", path)
    apply_text(document, "name", "Omeprazol", ("medication", "name"))

    assert document["medications"] == [
        {"name": "Metformina", "medication_type": "structured"},
        {"name": "Omeprazol", "medication_type": "structured"},
    ]


def test_title_triggers_title_mapping_and_text_mining():
    document = new_document("doc.xml")

    apply_text(document, "title", "Paciente con asma y salbutamol", ("clinicaldocument", "title"))

    names = [d["name"] for d in document["diagnoses"]]
    assert names == ["Asma"]
    assert document["diagnoses"][0]["code_system"] == "title_inferred"
    assert document["medications"] == [
        {"name": "salbutamol", "medication_type": "text_extracted"}
    ]


def test_unhandled_tag_does_nothing():
    document = new_document("doc.xml")

    assert apply_text(document, "paragraph", "diabetes", ("section", "paragraph")) is False
    assert document["diagnoses"] == []
