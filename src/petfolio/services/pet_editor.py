"""
Committing the pet form.

The final image is settled before the pet is written: a transport failure
aborts the whole commit so no pet is stored with a broken reference.
"""

from typing import TYPE_CHECKING

from ..errors import ImageProcessingError
from ..models.pet import Pet, PetDraft
from .auth import require_owner
from .image_pipeline import ImageSession, PipelineState
from .upload import UploadTransport

if TYPE_CHECKING:
    from ..stores.pets import PetStore


def resolve_pet_image(
    existing: str | None,
    session: ImageSession | None,
    transport: UploadTransport | None = None,
) -> str | None:
    """
    Decide which image reference a pet commit stores.

    Args:
        existing: Reference currently on the pet (or draft)
        session: Image editing session of the form, if any
        transport: Upload transport; without one the image is embedded inline

    Returns:
        The existing reference when nothing new was selected, otherwise the
        reference of the newly selected (and possibly cropped) image

    Raises:
        ImageProcessingError: If a new selection was never decoded
        UploadError: If the transport fails
    """
    if session is None or not session.has_selection:
        return existing

    if session.state is PipelineState.SELECTED:
        raise ImageProcessingError(
            "Selected image could not be read",
            code="pet_image_not_decoded",
            details={"filename": session.filename},
        )

    return session.commit(transport)


def commit_pet(
    store: "PetStore",
    draft: PetDraft,
    authorized: bool,
    pet_id: str | None = None,
    session: ImageSession | None = None,
    transport: UploadTransport | None = None,
) -> Pet:
    """
    Create or update a pet from its form draft.

    Args:
        store: PetStore receiving the pet
        draft: Form state
        authorized: Owner capability
        pet_id: Pet being edited, None to create
        session: Image session holding a newly selected image
        transport: Upload transport for the new image

    Returns:
        The stored pet
    """
    require_owner(authorized, "update pet" if pet_id else "create pet")

    draft.image = resolve_pet_image(draft.image, session, transport)

    if pet_id:
        return store.save_draft(pet_id, draft, authorized)
    return store.create(draft, authorized)
