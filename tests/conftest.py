"""Shared fixtures for covjobs tests."""

import textwrap

import pytest


SOURCE = textwrap.dedent("""\
    <?php
    class Foo
    {
        public function bar()
        {
            return 1;
        }
    }
""")


def clover_xml(source_path, lines, statements=None):
    """Render a minimal clover document for one source file."""
    line_elements = "\n".join(
        f'        <line num="{num}" type="{kind}" count="{count}"/>'
        for num, kind, count in lines
    )
    if statements is None:
        statements = len([line for line in lines if line[1] == "stmt"])
    return textwrap.dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <coverage generated="1700000000">
          <project timestamp="1700000000">
            <package name="App">
              <file name="{path}">
        {lines}
                <metrics loc="8" ncloc="8" statements="{statements}" coveredstatements="1"/>
              </file>
            </package>
          </project>
        </coverage>
    """).format(path=source_path, lines=line_elements, statements=statements)


@pytest.fixture
def project(tmp_path):
    """Project root with one source file, a clover log and .coveralls.yml."""
    src = tmp_path / "src"
    src.mkdir()
    source_file = src / "Foo.php"
    source_file.write_text(SOURCE)

    logs = tmp_path / "build" / "logs"
    logs.mkdir(parents=True)
    clover = logs / "clover.xml"
    clover.write_text(clover_xml(str(source_file), [(4, "method", 1), (6, "stmt", 3)]))

    (tmp_path / ".coveralls.yml").write_text(
        "repo_token: test-token\n"
        "coverage_clover: build/logs/clover.xml\n"
    )
    return tmp_path


@pytest.fixture
def make_clover():
    """Factory rendering clover documents."""
    return clover_xml
