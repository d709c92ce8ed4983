"""Display ordering of committee members."""

from conference_portal.core.models import CommitteeMember


def move_member(
    members: list[CommitteeMember], from_index: int, to_index: int
) -> tuple[list[CommitteeMember], list[CommitteeMember]]:
    """Move one member and renumber ``order`` as 0..n-1.

    Indexes are positions in the list sorted by the current ``order``.

    Returns the reordered list (copies, the input is untouched) and the members
    whose ``order`` value changed and must be saved.
    """
    count = len(members)
    if not 0 <= from_index < count:
        raise IndexError(f"from_index {from_index} out of range for {count} members")
    if not 0 <= to_index < count:
        raise IndexError(f"to_index {to_index} out of range for {count} members")

    reordered = [m.model_copy() for m in sorted(members, key=lambda m: m.order)]
    reordered.insert(to_index, reordered.pop(from_index))

    changed = []
    for position, member in enumerate(reordered):
        if member.order != position:
            member.order = position
            changed.append(member)
    return reordered, changed
