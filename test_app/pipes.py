from repository_pipes.pipes import Pipe


class UppercaseTitle(Pipe):
    name = "uppercase_title"

    def handle(self, payload, next_pipe, *arguments):
        if "title" in payload:
            payload = {**payload, "title": payload["title"].upper()}
        return next_pipe(payload)


class AppendSuffix(Pipe):
    name = "append_suffix"

    def handle(self, payload, next_pipe, *arguments):
        suffix = "".join(arguments) or "!"
        return next_pipe({**payload, "title": payload["title"] + suffix})


class Refuse(Pipe):
    """Short-circuits the chain."""

    name = "refuse"

    def handle(self, payload, next_pipe, *arguments):
        return None


class Explode(Pipe):
    name = "explode"

    def handle(self, payload, next_pipe, *arguments):
        raise RuntimeError("pipe failed")


def trim_title(payload, next_pipe):
    return next_pipe({**payload, "title": payload["title"].strip()})


not_a_pipe = 42
