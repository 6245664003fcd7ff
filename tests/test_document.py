import pytest

from parsers import XmlStructureError, parse_cda_document


def test_parse_sample_document(sample_cda):
    document = parse_cda_document("sample.xml", sample_cda)

    patient = document["patient"]
    assert document["file_name"] == "sample.xml"
    assert patient["gender"] == "F"
    assert patient["birth_date"] == "19900315"
    assert patient["age"] == 34
    assert patient["name"] == "Ana María Ruiz"
    # The only id sits on patientRole, outside the patient element.
    assert patient["id"] is None
    assert document["document_date"] == "20240110"
    assert document["author"] == "Dr. Pérez"
    assert document["medications"] == [
        {"name": "Metformina", "medication_type": "structured"}
    ]


def test_title_diagnoses_suppress_medication_inference(sample_cda):
    document = parse_cda_document("sample.xml", sample_cda)

    names = [d["name"] for d in document["diagnoses"]]
    assert "Diabetes" in names
    assert "Hipertensión" in names
    assert "Diabetes mellitus tipo 2" not in names
    assert names == sorted(names)
    provenance = {d["name"]: d["code_system"] for d in document["diagnoses"]}
    assert provenance["Diabetes"] == "title_inferred"
    assert provenance["diabético"] == "text_extracted"


def test_structured_diagnosis_with_code():
    sample_xml = """
    <ClinicalDocument xmlns="urn:hl7-org:v3">
      <component>
        <section>
          <entry>
            <observation classCode="OBS" moodCode="EVN">
              <code displayName="Gastritis crónica" code="K29.5" codeSystem="2.16.840.1.113883.6.3"/>
            </observation>
          </entry>
          <entry>
            <substanceAdministration>
              <consumable>
                <manufacturedProduct>
                  <manufacturedMaterial>
                    <name>Enalapril</name>
                  </manufacturedMaterial>
                </manufacturedProduct>
              </consumable>
            </substanceAdministration>
          </entry>
        </section>
      </component>
    </ClinicalDocument>
    """

    document = parse_cda_document("gastritis.xml", sample_xml)

    assert document["diagnoses"] == [
        {"code": "K29.5", "name": "Gastritis crónica", "code_system": None}
    ]
    assert [m["name"] for m in document["medications"]] == ["Enalapril"]


def test_medication_inference_without_diagnoses():
    sample_xml = """
    <ClinicalDocument>
      <component>
        <manufacturedMaterial><name>salbutamol</name></manufacturedMaterial>
      </component>
    </ClinicalDocument>
    """

    document = parse_cda_document("asthma.xml", sample_xml)

    assert document["medications"] == [
        {"name": "Salbutamol", "medication_type": "structured"}
    ]
    assert document["diagnoses"] == [
        {"code": None, "name": "Asma bronquial", "code_system": "medication_inferred"}
    ]


def test_free_text_section_is_mined():
    sample_xml = """
    <ClinicalDocument>
      <component>
        <section>
          <title>Plan</title>
          <text>Iniciar amoxicillin y continuar con losartan 50 mg.</text>
        </section>
      </component>
    </ClinicalDocument>
    """

    document = parse_cda_document("plan.xml", sample_xml)

    assert [m["name"] for m in document["medications"]] == [
        "50 mg",
        "amoxicillin",
        "losartan",
    ]
    assert all(m["medication_type"] == "text_extracted" for m in document["medications"])


def test_patient_id_inside_patient_element():
    sample_xml = """
    <ClinicalDocument>
      <recordTarget><patientRole><patient>
        <id extension="PAT-42"/>
      </patient></patientRole></recordTarget>
    </ClinicalDocument>
    """

    document = parse_cda_document("id.xml", sample_xml)

    assert document["patient"]["id"] == "PAT-42"


def test_bytes_input_is_accepted(sample_cda):
    document = parse_cda_document("sample.xml", sample_cda.encode("utf-8"))

    assert document["author"] == "Dr. Pérez"


def test_malformed_document_raises():
    with pytest.raises(XmlStructureError) as excinfo:
        parse_cda_document("broken.xml", "<ClinicalDocument><patient></ClinicalDocument>")

    assert excinfo.value.file_name == "broken.xml"
