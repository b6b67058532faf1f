import zipfile
from pathlib import Path

import pytest


SAMPLE_PROJECT = """{
\t"objName": "Stage",
\t"variables": [{
\t\t\t"name": "score",
\t\t\t"value": 0,
\t\t\t"isPersistent": false
\t\t}],
\t"scripts": [[20,
\t\t\t20,
\t\t\t[["whenGreenFlagClicked"], ["setVar:to:", "score", 0]]]],
\t"sounds": [{
\t\t\t"soundName": "pop",
\t\t\t"soundID": 1
\t\t}],
\t"children": [{
\t\t\t"objName": "Sprite1",
\t\t\t"scripts": [[47, 62, [["whenGreenFlagClicked"], ["doForever", [["forward:", 10], ["doIf", ["=", ["xpos"], 100], [["changeVar:by:", "score", 1]]]]]]]],
\t\t\t"costumes": [{
\t\t\t\t\t"costumeName": "costume1",
\t\t\t\t\t"rotationCenterX": 47
\t\t\t\t}]
\t\t},
\t\t{
\t\t\t"objName": "Sprite2",
\t\t\t"scripts": [[10, 10, [["whenKeyPressed", "space"], ["say:", "[hi]"]]]]
\t\t},
\t\t{
\t\t\t"target": "Stage",
\t\t\t"cmd": "timer"
\t\t}],
\t"info": {
\t\t"projectID": "1"
\t}
}
"""

SAMPLE_RENDERED = (
    "    Stage\n"
    "        whenGreenFlagClicked\n"
    "        setVar:to:\n"
    "        Sprite1\n"
    "            whenGreenFlagClicked\n"
    "            doForever\n"
    "                forward:\n"
    "                doIf\n"
    "                    =\n"
    "                    xpos\n"
    "                    changeVar:by:\n"
    "        Sprite2\n"
    "            whenKeyPressed\n"
    "            say:\n"
)


def simple_project(sprite: str, opcode: str) -> str:
    return (
        "{\n"
        '\t"objName": "Stage",\n'
        '\t"scripts": [[0, 0, [["whenGreenFlagClicked"]]]],\n'
        '\t"children": [{\n'
        f'\t\t\t"objName": "{sprite}",\n'
        f'\t\t\t"scripts": [[0, 0, [["{opcode}"]]]]\n'
        "\t\t}]\n"
        "}\n"
    )


def write_archive(path: Path, description: str, member: str = "project.json") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(member, description)
        archive.writestr("0.png", b"\x89PNG")
    return path


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    """Two owners, 3 and 7, with one archive each."""
    root = tmp_path / "projects"
    write_archive(root / "3" / "maze.sb2", simple_project("Cat", "hide"))
    write_archive(root / "7" / "pong.sb2", SAMPLE_PROJECT)
    return root
