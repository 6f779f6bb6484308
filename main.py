import subprocess

from rich.pretty import pprint

from termost import *


def gitstatus(values):
    return subprocess.run(["git", "status"], capture_output=True, text=True).stdout


program = termost("Example to showcase the termost step builder")

program.command(name="build", description="Transpile and bundle in production mode") \
    .option(key="watch", name="watch", alias="w", description="Rebuild on change", default=False) \
    .task(key="bundle", label="Bundling", handler=lambda values: "bundled (watch=%s)" % values["watch"])

program.command(name="watch", description="Rebuild your assets on any code change")

program \
    .ask(
        key="question1",
        label="What is your single choice?",
        type="select:single",
        choices=("singleOption1", "singleOption2"),
        default="singleOption1",
    ) \
    .ask(
        key="question2",
        label="What is your multiple choices?",
        type="select:multiple",
        choices=("multipleOption1", "multipleOption2"),
        default=("multipleOption2",),
        skip=lambda values: values["question1"] != "singleOption2",
    ) \
    .ask(
        key="question3",
        label="Are you sure to skip next question?",
        type="confirm",
        default=True,
    ) \
    .ask(
        key="question4",
        label="Could you enter a custom command?",
        default="npm info termost",
        skip=lambda values: values["question3"],
    ) \
    .task(
        key="gitstatus",
        label="Checking git status",
        handler=gitstatus,
        skip=lambda values: values.get("question4", "bypass next command") == "bypass next command",
    )


@program.task(label="Summary")
def summary(values):
    pprint(values)


if __name__ == '__main__':
    program.run()
