from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from breedline.application.errors import ValidationError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import load_owned_animal
from breedline.domain.models.genetic_profile import PedigreeEntry
from breedline.domain.services.lineage import PedigreeNode, build_pedigree_tree, trace_pedigree

MAX_TREE_DEPTH = 6


@dataclass(slots=True)
class PedigreeOutput:
    animal_id: UUID
    depth: int
    generations: int
    tree: PedigreeNode | None
    ancestors: list[PedigreeEntry] = field(default_factory=list)


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    animal_id: UUID,
    depth: int = 3,
    *,
    max_ancestors: int = 50,
) -> PedigreeOutput:
    if depth < 1 or depth > MAX_TREE_DEPTH:
        raise ValidationError(
            f"Pedigree depth must be between 1 and {MAX_TREE_DEPTH}",
            details={"depth": depth},
        )
    animal = await load_owned_animal(uow, user_id, animal_id)

    async def fetch_animal(node_id: UUID):
        return animal if node_id == animal.id else await uow.animals.get(node_id)

    async def fetch_parents(node_id: UUID):
        node = await fetch_animal(node_id)
        return (node.sire_id, node.dam_id) if node else None

    tree = await build_pedigree_tree(animal.id, fetch_animal, max_depth=depth)
    generations, ancestors = await trace_pedigree(
        animal.id, fetch_parents, max_depth=depth, max_entries=max_ancestors
    )
    return PedigreeOutput(
        animal_id=animal.id,
        depth=depth,
        generations=generations,
        tree=tree,
        ancestors=ancestors,
    )
