"""Static checklist templates, one per service tag.

Templates only change with a code change, or by pointing
``MORCLEAN_TEMPLATES_FILE`` at a YAML file whose entries replace the built-in
ones tag by tag.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Union

from morclean.config import load_yaml_file
from morclean.filters.rules import ServiceTag, parse_tag


@dataclass(frozen=True)
class Section:
    label: str
    items: tuple[str, ...]


@dataclass(frozen=True)
class Template:
    tag: ServiceTag
    name: str
    sections: tuple[Section, ...]

    def to_dict(self) -> dict:
        return {
            "tag": self.tag.value,
            "name": self.name,
            "sections": [{"label": s.label, "items": list(s.items)} for s in self.sections],
        }


# Services whose checklists must include before and after photo sections.
PHOTO_TAGS = frozenset({ServiceTag.AIRBNB_TURNOVER, ServiceTag.MOVE_IN_OUT, ServiceTag.ONE_TIME})


def check_template(template: Template) -> None:
    """Raise ValueError unless `template` opens with arrival, closes with wrap-up,
    has items in every section, and carries photo sections where required.
    """
    name = template.tag.value
    if not template.sections:
        raise ValueError(f"{name}: template needs at least one section")
    labels = [s.label.lower() for s in template.sections]
    if "arrival" not in labels[0] and "intake" not in labels[0]:
        raise ValueError(f"{name}: first section must be arrival / intake, got {template.sections[0].label!r}")
    if "wrap" not in labels[-1]:
        raise ValueError(f"{name}: last section must be wrap-up, got {template.sections[-1].label!r}")
    for section in template.sections:
        if not section.items:
            raise ValueError(f"{name}/{section.label}: section has no items")
    if template.tag in PHOTO_TAGS:
        for phase in ("before", "after"):
            if not any(phase in label and "photo" in label for label in labels):
                raise ValueError(f"{name}: missing {phase} photos section")


class TemplateSet(Mapping[ServiceTag, Template]):
    """Read-only tag -> template mapping, built once and shared.

    Every tag must be present and every template must pass `check_template`.
    """

    def __init__(self, templates: Mapping[ServiceTag, Template]):
        missing = [t.value for t in ServiceTag if t not in templates]
        if missing:
            raise ValueError(f"no checklist template for: {', '.join(missing)}")
        for tag, template in templates.items():
            if template.tag is not tag:
                raise ValueError(f"{tag.value}: template is tagged {template.tag.value}")
            check_template(template)
        self._templates = MappingProxyType(dict(templates))

    def __getitem__(self, tag: ServiceTag) -> Template:
        return self._templates[tag]

    def __iter__(self) -> Iterator[ServiceTag]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


def _s(label: str, *items: str) -> Section:
    return Section(label, tuple(items))


# --- Shared sections ---
ARRIVAL = _s(
    "Arrival / Safety",
    "Park legally; avoid blocking driveways/walkways",
    "Announce arrival if occupied; respect quiet hours",
    "Disarm alarm (get notes), notify lead if issue",
)
KITCHEN = _s(
    "Kitchen",
    "Counters & backsplash wiped",
    "Sink scrubbed & shined",
    "Exterior appliances wiped",
    "Microwave inside/out",
    "Trash out; new liner",
    "Floor swept & mopped",
)
BATHROOMS = _s(
    "Bathrooms",
    "Toilet, tub/shower scrubbed",
    "Mirror & fixtures polished",
    "Counters & sink wiped",
    "Trash out; new liner",
    "Floor swept & mopped",
)
BEDROOMS = _s(
    "Bedrooms",
    "All surfaces dusted",
    "Make beds / tidy linens",
    "Mirrors & glass spot-free",
    "Floors vacuumed / mopped",
)
COMMON_AREAS = _s(
    "Common Areas",
    "Surfaces dusted",
    "Glass & mirrors spot-free",
    "Floors vacuumed / mopped",
)
DEEP_DETAIL = _s(
    "Deep Clean",
    "Baseboards wiped",
    "Cabinet doors wiped",
    "Doors/trim spot-cleaned",
    "Vents and fans dusted",
    "Behind/under movable items",
)
BEFORE_PHOTOS = _s(
    "Before Photos",
    "Photograph every room before touching anything",
    "At least 2 angles per room (doorway + opposite corner)",
    "Close-ups of damage, stains or left-behind items",
)
AFTER_PHOTOS = _s(
    "After Photos",
    "Photograph every room when finished",
    "Match the before-photo angles (2+ per room)",
    "Upload photos to the job before leaving",
)
WRAP_UP = _s(
    "Wrap-Up",
    "Walk through every room one last time",
    "Supplies and equipment loaded out",
    "Lights off, windows closed, doors locked",
    "Re-arm alarm if applicable; text lead when done",
)

# Standard is the master checklist everything else builds on.
STANDARD = Template(
    ServiceTag.STANDARD,
    "Standard Clean",
    (ARRIVAL, KITCHEN, BATHROOMS, BEDROOMS, COMMON_AREAS, WRAP_UP),
)

AIRBNB_TURNOVER = Template(
    ServiceTag.AIRBNB_TURNOVER,
    "Airbnb Turnover",
    (
        _s(
            "Arrival / Intake",
            "Confirm guests have checked out before entering",
            "Use lockbox / door code from job notes",
            "Note anything broken or missing; tell the host",
        ),
        BEFORE_PHOTOS,
        _s(
            "Linens & Beds",
            "Strip all beds; check mattress protectors",
            "Fresh linens on every bed, hospital corners",
            "Towels replaced and folded per host style",
        ),
        _s(
            "Kitchen Reset",
            "Dishes washed and put away",
            "Fridge emptied of guest food",
            "Counters, stovetop and sink wiped",
            "Coffee station reset",
            "Trash and recycling out; new liners",
        ),
        BATHROOMS,
        _s(
            "Restock",
            "Toilet paper (2+ rolls per bathroom)",
            "Soap, shampoo, conditioner",
            "Paper towels, dish soap, trash bags",
            "Report low host supplies",
        ),
        _s(
            "Staging",
            "Pillows and throws arranged",
            "Remotes and guidebook in place",
            "Thermostat set to host default",
        ),
        AFTER_PHOTOS,
        WRAP_UP,
    ),
)

DEEP_CLEAN = Template(
    ServiceTag.DEEP_CLEAN,
    "Deep Clean",
    (ARRIVAL, KITCHEN, BATHROOMS, BEDROOMS, COMMON_AREAS, DEEP_DETAIL, WRAP_UP),
)

MOVE_IN_OUT = Template(
    ServiceTag.MOVE_IN_OUT,
    "Move-In / Move-Out",
    (
        _s(
            "Arrival / Walkthrough",
            "Confirm the unit is empty of belongings",
            "Check utilities (water, power) are on",
            "Note existing damage before starting",
        ),
        BEFORE_PHOTOS,
        _s(
            "Kitchen",
            "Inside all cabinets and drawers",
            "Inside fridge and freezer",
            "Inside oven, range hood and filter",
            "Counters, sink and backsplash",
            "Floor swept & mopped",
        ),
        BATHROOMS,
        _s(
            "Rooms & Closets",
            "Closet shelves and rods wiped",
            "Baseboards and door frames wiped",
            "Light switches and outlets wiped",
            "Window sills and tracks",
            "Floors vacuumed / mopped",
        ),
        AFTER_PHOTOS,
        WRAP_UP,
    ),
)

POST_CONSTRUCTION = Template(
    ServiceTag.POST_CONSTRUCTION,
    "Post-Construction",
    (
        _s(
            "Arrival / Safety",
            "PPE on: mask, gloves, eye protection",
            "Check with site lead that work is finished",
            "Look for nails, screws and sharp debris",
        ),
        _s(
            "Debris & Dust",
            "Bag and remove loose debris",
            "HEPA vacuum all surfaces top to bottom",
            "Vents and returns vacuumed",
        ),
        _s(
            "Surfaces",
            "Remove paint splatter and stickers",
            "Cabinets inside and out",
            "Countertops and fixtures",
        ),
        _s(
            "Windows & Fixtures",
            "Window glass, frames and tracks",
            "Light fixtures and fans",
        ),
        _s(
            "Floors",
            "Vacuum twice, then damp mop",
            "Check grout and corners",
        ),
        WRAP_UP,
    ),
)

LISTING_PREP = Template(
    ServiceTag.LISTING_PREP,
    "Listing Prep",
    (
        ARRIVAL,
        _s(
            "Entry & Curb Appeal",
            "Front door and hardware wiped",
            "Entry swept; doormat shaken out",
            "Porch lights working",
        ),
        KITCHEN,
        BATHROOMS,
        _s(
            "Living Spaces",
            "All surfaces dusted",
            "Glass & mirrors spot-free",
            "Clutter staged out of sight",
            "Floors vacuumed / mopped",
        ),
        _s(
            "Photo-Ready Check",
            "Blinds opened evenly",
            "Beds made tight, towels folded",
            "No cords, trash bins or toiletries in view",
        ),
        WRAP_UP,
    ),
)

OFFICE_COMMERCIAL = Template(
    ServiceTag.OFFICE_COMMERCIAL,
    "Office / Commercial",
    (
        _s(
            "Arrival / Access",
            "Badge or key in; sign the visitor log",
            "Disarm alarm (get notes), notify lead if issue",
            "Respect occupied offices; don't move papers",
        ),
        _s(
            "Workstations",
            "Desks dusted around items",
            "Phones, keyboards and handles disinfected",
            "Trash and recycling emptied",
        ),
        _s(
            "Break Room",
            "Counters, sink and tables wiped",
            "Microwave and fridge exterior wiped",
            "Coffee area cleaned",
        ),
        _s(
            "Restrooms",
            "Toilets, urinals and sinks scrubbed",
            "Mirrors polished",
            "Soap, paper towels, toilet paper restocked",
        ),
        _s(
            "Floors & Trash",
            "Carpets vacuumed",
            "Hard floors swept & mopped",
            "All trash to the dumpster",
        ),
        WRAP_UP,
    ),
)

ONE_TIME = Template(
    ServiceTag.ONE_TIME,
    "One-Time Clean",
    (
        _s(
            "Arrival / Intake",
            "Park legally; avoid blocking driveways/walkways",
            "Walk the home with the client; confirm priorities",
            "Note existing damage before starting",
        ),
        BEFORE_PHOTOS,
        KITCHEN,
        BATHROOMS,
        BEDROOMS,
        COMMON_AREAS,
        AFTER_PHOTOS,
        WRAP_UP,
    ),
)

DEFAULT_TEMPLATES = TemplateSet({
    t.tag: t
    for t in (
        STANDARD,
        AIRBNB_TURNOVER,
        DEEP_CLEAN,
        MOVE_IN_OUT,
        POST_CONSTRUCTION,
        LISTING_PREP,
        OFFICE_COMMERCIAL,
        ONE_TIME,
    )
})


def _template_from_dict(tag: ServiceTag, data: Any) -> Template:
    if not isinstance(data, dict):
        raise ValueError(f"{tag.value}: template must be a mapping")
    raw_sections = data.get("sections")
    if not isinstance(raw_sections, list) or not raw_sections:
        raise ValueError(f"{tag.value}: template needs at least one section")
    sections = []
    for raw in raw_sections:
        if not isinstance(raw, dict) or not raw.get("label"):
            raise ValueError(f"{tag.value}: every section needs a label")
        items = raw.get("items")
        if not isinstance(items, list) or not items:
            raise ValueError(f"{tag.value}/{raw['label']}: items must be a non-empty list")
        if any(i is None or not str(i).strip() for i in items):
            raise ValueError(f"{tag.value}/{raw['label']}: items must not be blank")
        sections.append(Section(str(raw["label"]), tuple(str(i).strip() for i in items)))
    return Template(tag, str(data.get("name") or tag.value), tuple(sections))


def load_templates_file(path: Union[str, Path], base: TemplateSet = DEFAULT_TEMPLATES) -> TemplateSet:
    """Build a TemplateSet from YAML, keyed by tag value; tags not in the file keep `base`."""
    data = load_yaml_file(path)
    merged = dict(base)
    for key, value in data.items():
        tag = parse_tag(str(key))
        if tag is None:
            raise ValueError(f"{path}: unknown service tag {key!r}")
        merged[tag] = _template_from_dict(tag, value)
    return TemplateSet(merged)
