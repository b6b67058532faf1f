import os
import shutil
import zipfile
from typing import Iterator, List, Optional, Tuple

from .collection import ProjectCollection
from .constants import ARCHIVE_EXTENSION, DESCRIPTION_EXTENSION, OUTPUT_EXTENSION, STAGING_SUFFIX
from .diagnostics import DiagnosticCollector, DiagnosticContext
from .errors import ExtractorError
from .scanner import scan_lines
from .serializer import render_text
from .tree import Tree
from .utils import ensure_dir, parse_owner_id, remove_dir, replace_extension, staging_path


def unpack_archive(archive_path: str, dest_dir: str) -> List[str]:
    """Extract a project archive and return the description files it contained."""
    ensure_dir(dest_dir)
    with zipfile.ZipFile(archive_path, "r") as archive:
        archive.extractall(dest_dir)
    return [
        os.path.join(dest_dir, name)
        for name in sorted(os.listdir(dest_dir))
        if name.endswith(DESCRIPTION_EXTENSION) and os.path.isfile(os.path.join(dest_dir, name))
    ]


def iter_owner_dirs(input_dir: str, collector: DiagnosticCollector) -> Iterator[Tuple[int, str]]:
    """Yield (owner id, path) for every numerically named subdirectory."""
    for name in sorted(os.listdir(input_dir)):
        path = os.path.join(input_dir, name)
        if not os.path.isdir(path):
            continue
        owner_id = parse_owner_id(name)
        if owner_id is None:
            ctx = DiagnosticContext(project_name=name)
            ctx.warning("Skipping directory whose name is not an owner id")
            collector.add_context_diagnostics(ctx)
            continue
        yield owner_id, path


def list_archives(owner_dir: str) -> List[str]:
    return [
        os.path.join(owner_dir, name)
        for name in sorted(os.listdir(owner_dir))
        if name.endswith(ARCHIVE_EXTENSION) and os.path.isfile(os.path.join(owner_dir, name))
    ]


def scan_project_file(path: str, project_name: str, diag: DiagnosticContext) -> Optional[Tree]:
    """Scan one project description; failures are reported to ``diag`` and yield None."""
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return scan_lines(handle, project_name, diag)
    except (OSError, UnicodeDecodeError) as exc:
        diag.clear_location()
        diag.error(f"Could not read {os.path.basename(path)}: {exc}")
    except ExtractorError as exc:
        diag.error(str(exc))
    return None


def extract_archive(
    archive_path: str,
    owner_id: int,
    staging_dir: str,
    collection: ProjectCollection,
) -> DiagnosticContext:
    project_name = os.path.basename(archive_path)
    diag = DiagnosticContext(project_name=project_name, owner_id=owner_id)
    dest_dir = os.path.join(staging_dir, project_name)

    try:
        descriptions = unpack_archive(archive_path, dest_dir)
    except (zipfile.BadZipFile, OSError) as exc:
        diag.error(f"Could not unpack archive: {exc}")
        return diag

    if not descriptions:
        diag.warning("No project description found in archive")
    elif len(descriptions) > 1:
        diag.warning(f"Archive holds {len(descriptions)} project descriptions, writing one output for each")

    for description in descriptions:
        tree_name = project_name if len(descriptions) == 1 else description_name(project_name, description)
        tree = scan_project_file(description, tree_name, diag)
        if tree is not None:
            collection.add(owner_id, tree)
    return diag


def extract_projects(input_dir: str, staging_dir: str, collector: DiagnosticCollector) -> ProjectCollection:
    """Unpack and scan every owner's archives under ``input_dir``."""
    collection = ProjectCollection()
    for owner_id, owner_dir in iter_owner_dirs(input_dir, collector):
        archives = list_archives(owner_dir)
        if not archives:
            continue
        owner_staging = os.path.join(staging_dir, os.path.basename(owner_dir))
        ensure_dir(owner_staging)
        for archive_path in archives:
            diag = extract_archive(archive_path, owner_id, owner_staging, collection)
            collector.add_context_diagnostics(diag)
    return collection


def description_name(project_name: str, description_path: str) -> str:
    """Name the tree of one description in an archive that holds several."""
    archive_stem, extension = os.path.splitext(project_name)
    description_stem = os.path.splitext(os.path.basename(description_path))[0]
    return f"{archive_stem}-{description_stem}{extension}"


def output_filename(project_name: str) -> str:
    return replace_extension(project_name, OUTPUT_EXTENSION)


def write_tree(tree: Tree, owner_dir: str) -> str:
    path = os.path.join(owner_dir, output_filename(tree.name))
    text = render_text(tree, 1)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)
    return path


def write_projects(collection: ProjectCollection, output_dir: str, collector: DiagnosticCollector) -> List[str]:
    """Write one file per tree into a subdirectory per owner."""
    written: List[str] = []
    for owner_id, trees in collection.items():
        owner_dir = os.path.join(output_dir, str(owner_id))
        ensure_dir(owner_dir)
        for tree in trees:
            try:
                written.append(write_tree(tree, owner_dir))
            except OSError as exc:
                ctx = DiagnosticContext(project_name=tree.name, owner_id=owner_id)
                ctx.error(f"Could not write output: {exc}")
                collector.add_context_diagnostics(ctx)
    return written


def publish_output(pending_dir: str, output_dir: str, clean: bool = True) -> None:
    """Move freshly written output into place, replacing or merging over the old one."""
    if clean:
        remove_dir(output_dir)
    if os.path.isdir(output_dir):
        shutil.copytree(pending_dir, output_dir, dirs_exist_ok=True)
        remove_dir(pending_dir)
    else:
        ensure_dir(os.path.dirname(os.path.abspath(output_dir)))
        shutil.move(pending_dir, output_dir)


def run_extraction(
    input_dir: str,
    output_dir: str,
    clean: bool = True,
    keep_staging: bool = False,
    collector: Optional[DiagnosticCollector] = None,
) -> Tuple[ProjectCollection, DiagnosticCollector]:
    """Convert every owner's archives under ``input_dir`` into ``output_dir``.

    Archives are unpacked into ``<input_dir>-tmp`` and output is written to
    ``<output_dir>-tmp`` before being moved onto ``output_dir``.
    """
    if not os.path.isdir(input_dir):
        raise ExtractorError("Input directory not found", input_dir)

    collector = collector if collector is not None else DiagnosticCollector()
    staging_dir = staging_path(input_dir, STAGING_SUFFIX)
    pending_dir = staging_path(output_dir, STAGING_SUFFIX)

    remove_dir(pending_dir)
    ensure_dir(staging_dir)
    ensure_dir(pending_dir)
    try:
        collection = extract_projects(input_dir, staging_dir, collector)
        write_projects(collection, pending_dir, collector)
        publish_output(pending_dir, output_dir, clean)
    finally:
        remove_dir(pending_dir)
        if not keep_staging:
            remove_dir(staging_dir)
    return collection, collector
