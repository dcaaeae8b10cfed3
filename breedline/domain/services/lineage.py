"""Relatedness and ancestry traversal.

Traversals are bounded by depth and guarded against cyclic parent links: a node
already on the current path is never expanded again.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from breedline.domain.models.animal import Animal
from breedline.domain.models.genetic_profile import (
    RELATIONSHIP_COEFFICIENTS,
    KnownRelative,
    PedigreeEntry,
    Relationship,
)

ParentLinks = tuple[UUID | None, UUID | None]
FetchParents = Callable[[UUID], Awaitable[ParentLinks | None]]
FetchAnimal = Callable[[UUID], Awaitable[Animal | None]]

ANCESTOR_RELATIONSHIPS = frozenset(
    {Relationship.PARENT.value, Relationship.GRANDPARENT.value}
)


def _relative(animal_id: UUID, relationship: Relationship) -> KnownRelative:
    return KnownRelative(
        animal_id=animal_id,
        relationship=relationship.value,
        coefficient=RELATIONSHIP_COEFFICIENTS[relationship.value],
    )


def collect_relatives(
    animal: Animal,
    parent_relatives: Mapping[UUID, Iterable[KnownRelative]],
    kin: Iterable[Animal],
    offspring: Iterable[Animal],
) -> list[KnownRelative]:
    """Build the known close relatives of `animal`.

    `parent_relatives` maps each parent id to that parent's own known relatives;
    only the parents of a parent are carried over, as grandparents. `kin` are
    animals sharing at least one parent with `animal`.
    """
    found: dict[UUID, KnownRelative] = {}

    def keep(candidate: KnownRelative, *, replace_equal: bool = False) -> None:
        if candidate.animal_id == animal.id:
            return
        current = found.get(candidate.animal_id)
        if (
            current is None
            or candidate.coefficient > current.coefficient
            or (replace_equal and candidate.coefficient == current.coefficient)
        ):
            found[candidate.animal_id] = candidate

    parents = [p for p in (animal.sire_id, animal.dam_id) if p is not None]
    for parent_id in parents:
        keep(_relative(parent_id, Relationship.PARENT))
    for parent_id in parents:
        for rel in parent_relatives.get(parent_id, ()):
            if rel.relationship != Relationship.PARENT.value:
                continue
            keep(_relative(rel.animal_id, Relationship.GRANDPARENT))

    for other in kin:
        shares_sire = animal.sire_id is not None and other.sire_id == animal.sire_id
        shares_dam = animal.dam_id is not None and other.dam_id == animal.dam_id
        if shares_sire and shares_dam:
            keep(_relative(other.id, Relationship.FULL_SIBLING), replace_equal=True)
        elif shares_sire or shares_dam:
            keep(_relative(other.id, Relationship.HALF_SIBLING), replace_equal=True)

    for child in offspring:
        keep(_relative(child.id, Relationship.OFFSPRING))

    return list(found.values())


def inbreeding_coefficient(
    sire_relatives: Iterable[KnownRelative],
    dam_relatives: Iterable[KnownRelative],
) -> float:
    """Average relatedness over ancestors shared by both parents, clamped to [0, 1].

    Siblings and offspring of the parents are not ancestors of their child and
    never count as common ancestors.
    """
    dam_index = {
        rel.animal_id: rel.coefficient
        for rel in dam_relatives
        if rel.relationship in ANCESTOR_RELATIONSHIPS
    }
    shared = [
        (rel.coefficient + dam_index[rel.animal_id]) / 2
        for rel in sire_relatives
        if rel.relationship in ANCESTOR_RELATIONSHIPS and rel.animal_id in dam_index
    ]
    if not shared:
        return 0.0
    return max(0.0, min(1.0, sum(shared) / len(shared)))


def ancestor_label(side: str, generation: int) -> str:
    if generation <= 1:
        return side
    return "great_" * (generation - 2) + "grand" + side


async def trace_pedigree(
    animal_id: UUID,
    fetch_parents: FetchParents,
    *,
    max_depth: int = 3,
    max_entries: int = 50,
) -> tuple[int, list[PedigreeEntry]]:
    """Depth-first ancestor trace. Returns (deepest generation, entries)."""
    entries: list[PedigreeEntry] = []
    cache: dict[UUID, ParentLinks | None] = {}

    async def parents_of(node_id: UUID) -> ParentLinks | None:
        if node_id not in cache:
            cache[node_id] = await fetch_parents(node_id)
        return cache[node_id]

    async def visit(node_id: UUID, generation: int, path: frozenset[UUID]) -> None:
        links = await parents_of(node_id)
        if links is None:
            return
        for side, parent_id in zip(("sire", "dam"), links):
            if parent_id is None or parent_id in path:
                continue
            if len(entries) >= max_entries:
                return
            entries.append(
                PedigreeEntry(
                    animal_id=parent_id,
                    generation=generation,
                    relationship=ancestor_label(side, generation),
                )
            )
            if generation < max_depth:
                await visit(parent_id, generation + 1, path | {parent_id})

    await visit(animal_id, 1, frozenset({animal_id}))
    deepest = max((e.generation for e in entries), default=0)
    return deepest, entries


@dataclass(slots=True)
class PedigreeNode:
    animal_id: UUID
    tag: str
    name: str | None
    gender: str
    breed: str | None
    birth_date: date | None
    sire: PedigreeNode | None = None
    dam: PedigreeNode | None = None


async def build_pedigree_tree(
    animal_id: UUID,
    fetch_animal: FetchAnimal,
    *,
    max_depth: int = 3,
) -> PedigreeNode | None:
    async def build(node_id: UUID | None, depth: int, path: frozenset[UUID]) -> PedigreeNode | None:
        if node_id is None or node_id in path or depth > max_depth:
            return None
        animal = await fetch_animal(node_id)
        if animal is None:
            return None
        path = path | {node_id}
        return PedigreeNode(
            animal_id=animal.id,
            tag=animal.tag,
            name=animal.name,
            gender=animal.gender,
            breed=animal.breed,
            birth_date=animal.birth_date,
            sire=await build(animal.sire_id, depth + 1, path),
            dam=await build(animal.dam_id, depth + 1, path),
        )

    return await build(animal_id, 0, frozenset())
