"""Registry of loaded ontologies used to resolve import declarations."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from rdflib import URIRef

from onto_merge_core.errors import OntologyAlreadyExistsError
from onto_merge_core.model import ImportDeclaration, Ontology, OntologyID

LOGGER = logging.getLogger(__name__)


class OntologyManager:
    """Holds loaded ontologies and resolves imports between them.

    The manager never fetches anything: an import declaration resolves only
    to an ontology that has already been added, matched first on version IRI
    and then on ontology IRI.

    Example:
        >>> manager = OntologyManager()
        >>> core = manager.create_ontology(URIRef("http://example.org/core"))
        >>> app = manager.create_ontology(URIRef("http://example.org/app"))
        >>> _ = app.add_import(ImportDeclaration(core.ontology_iri))
        >>> app.direct_imports() == [core]
        True
    """

    def __init__(self) -> None:
        self._ontologies: List[Ontology] = []

    def __len__(self) -> int:
        return len(self._ontologies)

    def __iter__(self) -> Iterator[Ontology]:
        return iter(list(self._ontologies))

    def __contains__(self, ontology: object) -> bool:
        return any(ontology is o for o in self._ontologies)

    def create_ontology(
        self,
        ontology_iri: Optional[URIRef] = None,
        version_iri: Optional[URIRef] = None,
    ) -> Ontology:
        """Create an empty ontology and register it with this manager."""
        return self.add_ontology(Ontology(OntologyID(ontology_iri, version_iri)))

    def add_ontology(self, ontology: Ontology, allow_duplicate: bool = False) -> Ontology:
        """Register an existing ontology.

        Args:
            ontology: Ontology to register
            allow_duplicate: Register the ontology even when another one with
                the same identity is already registered. Lookups by IRI keep
                returning the first registered ontology.

        Raises:
            OntologyAlreadyExistsError: If a named ontology with the same
                identity is already registered
        """
        if ontology in self:
            return ontology
        ontology_id = ontology.ontology_id
        if not allow_duplicate and not ontology_id.is_anonymous():
            for existing in self._ontologies:
                if existing.ontology_id == ontology_id:
                    raise OntologyAlreadyExistsError(
                        str(ontology_id.ontology_iri),
                        str(ontology_id.version_iri) if ontology_id.version_iri else None,
                    )
        ontology.manager = self
        self._ontologies.append(ontology)
        LOGGER.debug("Registered ontology %s", ontology_id)
        return ontology

    def remove_ontology(self, ontology: Ontology) -> None:
        self._ontologies = [o for o in self._ontologies if o is not ontology]
        if ontology.manager is self:
            ontology.manager = None

    def get_ontology(self, iri: URIRef) -> Optional[Ontology]:
        """Find an ontology whose version IRI, or failing that ontology IRI, equals ``iri``."""
        for ontology in self._ontologies:
            if ontology.version_iri == iri:
                return ontology
        for ontology in self._ontologies:
            if ontology.ontology_iri == iri:
                return ontology
        return None

    def get_imported_ontology(self, declaration: ImportDeclaration) -> Optional[Ontology]:
        return self.get_ontology(declaration.iri)
