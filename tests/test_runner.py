from icpc_core import default_state, run_commands
from icpc_core.runner import main

SCRIPT = """\
ADDTEAM alpha
ADDTEAM beta
ADDTEAM alpha
START DURATION 300 PROBLEM 2
ADDTEAM gamma
START DURATION 300 PROBLEM 2
QUERY_RANKING beta
SUBMIT A BY alpha WITH Accepted AT 10
SUBMIT A BY beta WITH Wrong_Answer AT 20
SUBMIT A BY beta WITH Compile_Error AT 21
HELLO world
FLUSH
QUERY_RANKING beta
FREEZE
FREEZE
SUBMIT A BY beta WITH Accepted AT 30
SUBMIT B BY beta WITH Accepted AT 40
QUERY_RANKING alpha
SCROLL
SCROLL
QUERY_RANKING beta
QUERY_SUBMISSION beta WITH PROBLEM=A AND STATUS=Wrong_Answer
QUERY_SUBMISSION beta WITH PROBLEM=ALL AND STATUS=ALL
QUERY_SUBMISSION alpha WITH PROBLEM=B AND STATUS=ALL
QUERY_SUBMISSION gamma WITH PROBLEM=ALL AND STATUS=ALL
END
FLUSH
"""

EXPECTED = [
    "[Info]Add successfully.",
    "[Info]Add successfully.",
    "[Error]Add failed: duplicated team name.",
    "[Info]Competition starts.",
    "[Error]Add failed: competition has started.",
    "[Error]Start failed: competition has started.",
    "[Info]Complete query ranking.",
    "beta NOW AT RANKING 2",
    "[Info]Flush scoreboard.",
    "[Info]Complete query ranking.",
    "beta NOW AT RANKING 2",
    "[Info]Freeze scoreboard.",
    "[Error]Freeze failed: scoreboard has been frozen.",
    "[Info]Complete query ranking.",
    "[Warning]Scoreboard is frozen. The ranking may be inaccurate until it were scrolled.",
    "alpha NOW AT RANKING 1",
    "[Info]Scroll scoreboard.",
    "alpha 1 1 10 + .",
    "beta 2 0 0 1/0 0/0",
    "beta alpha 2 90",
    "beta 1 2 90 +1 +",
    "alpha 2 1 10 + .",
    "[Error]Scroll failed: scoreboard has not been frozen.",
    "[Info]Complete query ranking.",
    "beta NOW AT RANKING 1",
    "[Info]Complete query submission.",
    "beta A Wrong_Answer 20",
    "[Info]Complete query submission.",
    "beta B Accepted 40",
    "[Info]Complete query submission.",
    "Cannot find any submission.",
    "[Error]Query submission failed: cannot find the team.",
    "[Info]Competition ends.",
]


def test_full_transcript():
    assert list(run_commands(SCRIPT.splitlines())) == EXPECTED


def test_malformed_lines_are_skipped_and_logged(caplog):
    state = default_state()
    out = list(run_commands(["ADDTEAM alpha", "SUBMIT A BY alpha", "ADDTEAM beta"], state))
    assert out == ["[Info]Add successfully.", "[Info]Add successfully."]
    assert "Skipping line 2" in caplog.text
    assert set(state.teams) == {"alpha", "beta"}


def test_main_reads_input_file(tmp_path, capsys):
    script = tmp_path / "commands.txt"
    script.write_text("ADDTEAM solo\nSTART DURATION 10 PROBLEM 1\nFLUSH\nEND\n", encoding="utf-8")
    assert main(["--input", str(script)]) == 0
    captured = capsys.readouterr()
    assert captured.out.splitlines() == [
        "[Info]Add successfully.",
        "[Info]Competition starts.",
        "[Info]Flush scoreboard.",
        "[Info]Competition ends.",
    ]


def test_large_values_and_long_names_are_processed():
    long_name = "abcdefghijklmnopqrstuvwxyz"
    out = list(
        run_commands(
            [
                f"ADDTEAM {long_name}",
                "START DURATION 300000 PROBLEM 1",
                f"SUBMIT A BY {long_name} WITH Accepted AT 150000",
                "FLUSH",
                f"QUERY_SUBMISSION {long_name} WITH PROBLEM=ALL AND STATUS=ALL",
            ]
        )
    )
    assert out == [
        "[Info]Add successfully.",
        "[Info]Competition starts.",
        "[Info]Flush scoreboard.",
        "[Info]Complete query submission.",
        f"{long_name} A Accepted 150000",
    ]


def test_unknown_status_filter_answers_not_found():
    out = list(
        run_commands(
            [
                "ADDTEAM alpha",
                "START DURATION 10 PROBLEM 1",
                "SUBMIT A BY alpha WITH Accepted AT 1",
                "QUERY_SUBMISSION alpha WITH PROBLEM=ALL AND STATUS=Compile_Error",
            ]
        )
    )
    assert out[-2:] == ["[Info]Complete query submission.", "Cannot find any submission."]
