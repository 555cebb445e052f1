"""Breadcrumb navigation through a project's folder tree."""

from pydantic import BaseModel

from projectdocs.components.documents.models import Folder


class Breadcrumb(BaseModel):
    """One step of the path. `folderId` is None for the project root."""

    folderId: str | None = None
    name: str


class NavigationHistory:
    """Stack of visited folders from the root to the current folder.

    The first entry always denotes the root and is never removed; the last
    entry is the folder whose children are listed.
    """

    def __init__(self, root_name: str = "Root"):
        self.root_name = root_name
        self._stack: list[Breadcrumb] = [Breadcrumb(name=root_name)]

    @property
    def entries(self) -> list[Breadcrumb]:
        return list(self._stack)

    @property
    def current(self) -> Breadcrumb:
        return self._stack[-1]

    @property
    def current_folder_id(self) -> str | None:
        return self._stack[-1].folderId

    @property
    def depth(self) -> int:
        """Number of folders below the root."""
        return len(self._stack) - 1

    def descend(self, folder: Folder) -> Breadcrumb:
        crumb = Breadcrumb(folderId=folder.id, name=folder.name)
        self._stack.append(crumb)
        return crumb

    def ascend_one(self) -> Breadcrumb:
        """Pop the current folder; a no-op at the root."""
        if len(self._stack) > 1:
            self._stack.pop()
        return self.current

    def jump_to(self, index: int) -> Breadcrumb:
        """Truncate the path so that entry `index` becomes current.

        Raises:
            IndexError: If index is outside the current path
        """
        if index < 0 or index >= len(self._stack):
            raise IndexError(f"Breadcrumb index out of range: {index}")
        del self._stack[index + 1:]
        return self.current

    def reset(self) -> None:
        del self._stack[1:]
