"""Fixed eleven-stage workshop pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StageTemplate:
    id: int
    name: str
    checklist: tuple[str, ...]


STAGE_TEMPLATES: tuple[StageTemplate, ...] = (
    StageTemplate(1, "Vehicle Inward", (
        "Customer details verified",
        "Walkaround photos (6 angles)",
        "Accessories noted",
        "Job package confirmed",
    )),
    StageTemplate(2, "Inspection", (
        "Paint condition marked",
        "Existing scratches/dents marked",
        "Panel-wise note",
        "Customer approval",
    )),
    StageTemplate(3, "Washing (1)", ("Foam wash done", "Iron remover used", "Drying done")),
    StageTemplate(4, "Surface Preparation", ("Clay bar treatment", "IPA wipe", "Panel temperature OK")),
    StageTemplate(5, "Parts Opening", ("Trims removed safely", "Screws/clips tagged", "Photos before removal")),
    StageTemplate(6, "Washing (2)", ("Dust removed", "Final dry")),
    StageTemplate(7, "PPF Installation", (
        "Template checked",
        "Alignment approved",
        "Bubbles checked",
        "Edge wrap confirmed",
    )),
    StageTemplate(8, "Parts Repacking", ("Clips/screws reinstalled", "Torque/fitment check", "No rattles")),
    StageTemplate(9, "Cleaning & Finishing", ("Final wipe down", "Glass cleaned", "Interior quick clean")),
    StageTemplate(10, "Final Inspection", ("Panel-by-panel QC", "Edges + corners check", "Curing instructions ready")),
    StageTemplate(11, "Delivered", (
        "Customer walkthrough",
        "Delivery photos",
        "Payment closed",
        "Signature captured",
    )),
)

FIRST_STAGE = STAGE_TEMPLATES[0].id
LAST_STAGE = STAGE_TEMPLATES[-1].id
STAGE_COUNT = len(STAGE_TEMPLATES)


def get_template(stage_id: int) -> StageTemplate | None:
    if FIRST_STAGE <= stage_id <= LAST_STAGE:
        return STAGE_TEMPLATES[stage_id - 1]
    return None
