from io import BytesIO

from id3frames import ID3FramesError
from id3frames.id3 import ID3, FrameFactory, ID3SaveConfig


def run_tag(data):
    try:
        tag = ID3(BytesIO(data))
    except ID3FramesError:
        return

    tag.pprint()
    tag.version_string(verbose=True)
    rendered = tag.render(ID3SaveConfig(padding=0.1))

    # a rendered tag has to load again
    ID3(BytesIO(rendered))

    tag.revert()
    tag.render()


def run_frames(data):
    """Reads a frame at every offset, as if data was an ID3v2 tag of any
    version"""

    for version in (2, 3, 4):
        factory = FrameFactory(BytesIO(data), version, len(data))
        for offset in range(len(data)):
            frame = factory.create(offset)
            frame.pprint()
            frame.write()
            frame.revert()


def run_all(data):
    run_tag(data)
    run_frames(data[:512])


def group_crashes(result_path):
    """Re-checks all errors, and groups them by stack trace
    and error type.
    """

    crash_paths = []
    pattern = os.path.join(result_path, '**', 'crashes', '*')
    for path in glob.glob(pattern):
        if os.path.splitext(path)[-1] == ".txt":
            continue
        crash_paths.append(path)

    if not crash_paths:
        print("No crashes found")
        return

    def norm_exc():
        lines = traceback.format_exc().splitlines()
        if ":" in lines[-1]:
            lines[-1], message = lines[-1].split(":", 1)
        else:
            message = ""
        return "\n".join(lines), message.strip()

    traces = {}
    messages = {}
    for path in crash_paths:
        with open(path, "rb") as h:
            data = h.read()
        try:
            run_all(data)
        except Exception:
            trace, message = norm_exc()
            messages.setdefault(trace, set()).add(message)
            traces.setdefault(trace, []).append(path)

    for trace, paths in traces.items():
        print('-' * 80)
        print("\n".join(paths))
        print()
        print(textwrap.indent(trace, '    '))
        print(messages[trace])

    print("%d crashes with %d traces" % (len(crash_paths), len(traces)))


if __name__ == '__main__':
    import sys
    import glob
    import os
    import traceback
    import textwrap
    group_crashes(sys.argv[1])
