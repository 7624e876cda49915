"""
Command line and example vector tests.
"""

import json

import pytest

from safetag.cli import EXIT_OK, EXIT_USAGE, EXIT_VECTOR_FAILURE, PROFILE_ENV, main
from safetag.vectors import DEFAULT_VECTORS, LENGTHS, TagVector, VectorRunner


@pytest.fixture(autouse=True)
def no_profile_env(monkeypatch):
    monkeypatch.delenv(PROFILE_ENV, raising=False)


# =============================================================================
# COMPUTE / SERIALIZE
# =============================================================================

class TestCompute:

    def test_words(self, capsys):
        rc = main(['compute', '-w', '0x80000003', '0x00000001', '-d', '0x41424344'])
        assert rc == EXIT_OK
        assert capsys.readouterr().out.strip() == '66b7880be9effaf179c219aa02103ffb'

    def test_lengths(self, capsys):
        rc = main(['compute', '-l', '3', '1', '-d', '0x41424344', '--prefix'])
        assert rc == EXIT_OK
        assert capsys.readouterr().out.strip() == '0x66b7880be9effaf179c219aa02103ffb'

    def test_profile_option(self, capsys):
        rc = main(['--profile', 'safe-64', 'compute', '-w', '0x80000003', '0x00000001',
                   '-d', '0x41424344'])
        assert rc == EXIT_OK
        assert capsys.readouterr().out.strip() == '0ea2aa7e178caa74de1f91e83ad43a81'

    def test_profile_after_subcommand(self, capsys):
        rc = main(['compute', '--lengths', '3', '1', '--domain', '0x41424344',
                   '--profile', 'safe-64'])
        assert rc == EXIT_OK
        assert capsys.readouterr().out.strip() == '0ea2aa7e178caa74de1f91e83ad43a81'

    def test_subcommand_profile_overrides_top_level(self, capsys):
        rc = main(['--profile', 'safe-32', 'compute', '-p', 'safe-64',
                   '-w', '0x80000003', '0x00000001', '-d', '0x41424344'])
        assert rc == EXIT_OK
        assert capsys.readouterr().out.strip() == '0ea2aa7e178caa74de1f91e83ad43a81'

    def test_top_level_profile_kept_when_subcommand_omits_it(self, capsys):
        rc = main(['--profile', 'safe-64', 'serialize', '-w', '0x80000003', '-d', '0x41'])
        assert rc == EXIT_OK
        assert capsys.readouterr().out.strip() == '80000003' '41' + '00' * 63

    def test_serialize_profile_after_subcommand(self, capsys):
        rc = main(['serialize', '-w', '0x80000003', '-d', '0x41', '--profile', 'safe-64'])
        assert rc == EXIT_OK
        assert capsys.readouterr().out.strip() == '80000003' '41' + '00' * 63

    def test_profile_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv(PROFILE_ENV, 'safe-64')
        rc = main(['compute', '-l', '3', '1', '-d', '0x41424344'])
        assert rc == EXIT_OK
        assert capsys.readouterr().out.strip() == '0ea2aa7e178caa74de1f91e83ad43a81'

    def test_explain(self, capsys):
        rc = main(['compute', '--explain', '-w', '0x80000001', '0x80000001', '0x00000001',
                   '-d', '0x41424344'])
        out = capsys.readouterr().out
        assert rc == EXIT_OK
        assert '80000002 00000001' in out
        assert '0xaf01d5d39751a2eb3d24d0c27c9553a7' in out

    def test_serialize(self, capsys):
        rc = main(['serialize', '-w', '0x80000003', '0x00000001', '-d', '0x41424344'])
        assert rc == EXIT_OK
        assert capsys.readouterr().out.strip() == \
            '80000003' '00000001' '41424344' + '00' * 28

    def test_separator_too_long(self, capsys):
        rc = main(['compute', '-w', '0x80000003', '-d', '0x' + '41' * 33])
        assert rc == EXIT_USAGE
        assert 'error:' in capsys.readouterr().err

    def test_bad_hex(self, capsys):
        rc = main(['compute', '-w', '0x80000003', '-d', '0x414'])
        assert rc == EXIT_USAGE
        assert 'odd length' in capsys.readouterr().err

    def test_unknown_profile(self, capsys):
        rc = main(['--profile', 'safe-48', 'compute', '-w', '1', '-d', '0x41'])
        assert rc == EXIT_USAGE
        assert 'safe-48' in capsys.readouterr().err

    def test_length_overflow(self, capsys):
        rc = main(['compute', '-l', str(2 ** 31), '-d', '0x41'])
        assert rc == EXIT_USAGE

    def test_requires_pattern(self):
        with pytest.raises(SystemExit):
            main(['compute', '-d', '0x41'])


# =============================================================================
# VECTORS
# =============================================================================

class TestVectors:

    def test_default_vectors_pass(self):
        report = VectorRunner().run()
        failures = [(r.name, r.details) for r in report.results if not r.passed]
        assert failures == []
        assert report.total == len(DEFAULT_VECTORS)

    def test_vector_names_unique(self):
        names = [v.name for v in DEFAULT_VECTORS]
        assert len(names) == len(set(names))

    def test_vectors_hash_stable(self):
        assert VectorRunner().vectors_hash() == VectorRunner().vectors_hash()

    def test_wrong_expectation_fails(self):
        vectors = [
            TagVector('a', 'ABSORB(3)', [0x80000003], '0x41', 'safe-32', expected='00' * 16),
        ]
        report = VectorRunner(vectors).run()
        assert not report.ok
        assert 'expected' in report.results[0].details

    def test_relations(self):
        vectors = [
            TagVector('a', 'ABSORB(2)', [0x80000002], '0x41', 'safe-32'),
            TagVector('b', 'lengths [1, 0, 1]', [1, 0, 1], '0x41', 'safe-32',
                      encoding=LENGTHS, same_as='a'),
            TagVector('c', 'ABSORB(2), other domain', [0x80000002], '0x42', 'safe-32',
                      differs_from='a'),
            TagVector('d', 'ABSORB(2), same domain', [0x80000002], '0x41', 'safe-32',
                      differs_from='a'),
        ]
        report = VectorRunner(vectors).run()
        assert [r.passed for r in report.results] == [True, True, True, False]
        assert 'collides with a' in report.results[3].details

    def test_cli_vectors(self, capsys, tmp_path):
        rc = main(['vectors', '--output', str(tmp_path)])
        out = capsys.readouterr().out
        assert rc == EXIT_OK
        assert f"{len(DEFAULT_VECTORS)}/{len(DEFAULT_VECTORS)} passed" in out

        report = json.loads((tmp_path / 'report.json').read_text())
        assert report['failed'] == 0
        vectors = json.loads((tmp_path / 'vectors.json').read_text())
        assert {v['name'] for v in vectors} == {v.name for v in DEFAULT_VECTORS}

    def test_cli_vector_failure_exit_code(self, monkeypatch, capsys):
        broken = [TagVector('x', 'ABSORB(1)', [0x80000001], '0x41', 'safe-32', expected='00' * 16)]
        monkeypatch.setattr('safetag.vectors.DEFAULT_VECTORS', broken)
        rc = main(['vectors'])
        assert rc == EXIT_VECTOR_FAILURE
        assert '[FAIL] x' in capsys.readouterr().out
