from __future__ import annotations

from typing import Iterator

import pytest

from services.cda_parser import CDAParser

SAMPLE_CDA = """<?xml version="1.0" encoding="UTF-8"?>
<ClinicalDocument xmlns="urn:hl7-org:v3">
  <code code="34133-9" displayName="Summary of episode note"/>
  <title>Paciente diabético hipertenso</title>
  <effectiveTime value="20240110"/>
  <recordTarget>
    <patientRole>
      <id root="1.2.3" extension="ROLE-9"/>
      <patient>
        <name>
          <given>Ana</given>
          <given>María</given>
          <family>Ruiz</family>
        </name>
        <administrativeGenderCode code="F"/>
        <birthTime value="19900315"/>
      </patient>
    </patientRole>
  </recordTarget>
  <author>
    <time value="20240110"/>
    <assignedAuthor>
      <assignedPerson>
        <name>Dr. Pérez</name>
      </assignedPerson>
    </assignedAuthor>
  </author>
  <component>
    <structuredBody>
      <component>
        <section>
          <entry>
            <substanceAdministration>
              <effectiveTime value="20231201"/>
              <consumable>
                <manufacturedProduct>
                  <manufacturedMaterial>
                    <name>metformin</name>
                  </manufacturedMaterial>
                </manufacturedProduct>
              </consumable>
            </substanceAdministration>
          </entry>
        </section>
      </component>
    </structuredBody>
  </component>
</ClinicalDocument>
"""


def make_cda(
    *,
    gender: str = "M",
    birth_time: str = "19800101",
    medication: str = "Enalapril",
    problem: str | None = None,
) -> str:
    """Build a small CDA document with one medication and an optional problem."""
    problem_entry = ""
    if problem:
        problem_entry = f"""
          <entry>
            <observation>
              <code displayName="{problem}" code="P-{len(problem)}"/>
            </observation>
          </entry>"""
    return f"""
    <ClinicalDocument xmlns="urn:hl7-org:v3">
      <recordTarget>
        <patientRole>
          <patient>
            <administrativeGenderCode code="{gender}"/>
            <birthTime value="{birth_time}"/>
          </patient>
        </patientRole>
      </recordTarget>
      <component>
        <section>
          <entry>
            <manufacturedMaterial>
              <name>{medication}</name>
            </manufacturedMaterial>
          </entry>{problem_entry}
        </section>
      </component>
    </ClinicalDocument>
    """


@pytest.fixture
def sample_cda() -> str:
    return SAMPLE_CDA


@pytest.fixture
def parser() -> Iterator[CDAParser]:
    """Provide a fresh parser with the default reference year."""
    cda_parser = CDAParser()
    try:
        yield cda_parser
    finally:
        cda_parser.clear()


@pytest.fixture
def cda_factory():
    """Return the builder for small single-medication CDA documents."""
    return make_cda
