from typing import Dict, Iterable, List, Set

import networkx as nx

from .models import Cohort, ConflictMatrix, ExamSection


def build_conflict_matrix(sections: Iterable[ExamSection]) -> ConflictMatrix:
    """Per cohort, map each subject to the other subjects that cohort sits.

    Parallel sections of one subject never conflict with each other.
    Sections without a course or year level belong to no cohort.
    """
    groups: Dict[Cohort, List[str]] = {}
    for s in sections:
        cohort = s.cohort
        if cohort is None:
            continue
        subjects = groups.setdefault(cohort, [])
        if s.subject_id not in subjects:
            subjects.append(s.subject_id)
    matrix: ConflictMatrix = {}
    for cohort, subjects in groups.items():
        matrix[cohort] = {sid: {o for o in subjects if o != sid} for sid in subjects}
    return matrix


def conflicts_for(matrix: ConflictMatrix, section: ExamSection) -> Set[str]:
    cohort = section.cohort
    if cohort is None:
        return set()
    return matrix.get(cohort, {}).get(section.subject_id, set())


def build_conflict_graph(matrix: ConflictMatrix) -> nx.Graph:
    """Subject conflict graph; each edge records the cohorts that induce it."""
    G = nx.Graph()
    for cohort, by_subject in matrix.items():
        for u, others in by_subject.items():
            G.add_node(u)
            for v in others:
                if G.has_edge(u, v):
                    G[u][v]['cohorts'].add(cohort)
                else:
                    G.add_edge(u, v, cohorts={cohort})
    return G
