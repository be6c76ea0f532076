import argparse
import os
from typing import Optional

from tqdm.auto import tqdm

from dirlisting import LocalConnector, TreeWalker


def _directory(value: str) -> str:
    if not os.path.isdir(value):
        raise argparse.ArgumentTypeError(f"not a directory: '{value}'")
    return os.path.abspath(value)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog='dirlisting',
        description='generate index.html listings for every directory of a tree'
    )
    parser.add_argument('root', nargs='?', default=os.getcwd(), type=_directory, help='tree root directory')
    args = parser.parse_args(argv)

    walker = TreeWalker(LocalConnector())
    print(f'Starting directory listing generation from: {args.root}')
    with tqdm(desc='Directories', unit='dir') as pbar:
        walker.generate(args.root, pbar=pbar)
    print('Directory listings generated successfully.')


if __name__ == '__main__':
    main()
