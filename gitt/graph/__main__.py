# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

if __name__ == '__main__':
    from gitt.graph import *
    from argparse import ArgumentParser

    parser = ArgumentParser(description="gitt ASCII graph tool")
    parser.add_argument("definition", help="Graph definition (e.g.: \"u:z i:b m:a,b a:z b-c-z\")", nargs="+")
    parser.add_argument("-c", "--chunk", type=int, default=0, help="Feed commits to the graph builder in chunks of this size")
    parser.add_argument("-n", "--max-rows", type=int, default=200)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    definition = " ".join(args.definition)
    sequence, heads = GraphDiagram.parseDefinition(definition)

    builder = GraphBuildLoop()
    if args.chunk > 0:
        for i in range(0, len(sequence), args.chunk):
            builder.sendChunk(sequence[i:i + args.chunk])
    else:
        builder.sendAll(sequence)

    if args.verbose:
        print("Heads:", " ".join(sorted(heads)))
        print("Dangling:", " ".join(sorted(builder.pendingIds)) or "-")

    print(GraphDiagram.diagram(builder.rows, maxRows=args.max_rows, verbose=args.verbose))
