# arcgrid

Building blocks for working with abstraction-and-reasoning grid puzzles.
Puzzles use small coloured images, with colours 0–9 and 0 as the background.
The package covers reading and writing task files, grid transforms, colour
and orientation normalisation, and scoring of candidate answers.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `arcgrid.image` provides these:
  - `Point`, with `+`, `-`, `*`, `divide`, `dot` and `cross`.
  - `Image`, a grid placed at a position. It has `p` and `sz`, indexing by
    `(row, column)`, `safe`, `rows`, `copy`, `count`, `col_mask` and
    `majority_col`.
  - `Spec`, a per-cell set of allowed colours, with `check`.
  - `Limits`, the size limits for images that transforms produce.
  - The helpers `empty`, `full`, `from_rows`, `bad_image`, `dummy_image`,
    `hash_image`, `check_all` and `all_equal`.
- `arcgrid.loader` provides `Loader`, a one-line text progress bar. Call it
  once per step. It can be used as a context manager, and `close` blanks the
  bar.
- `arcgrid.task_io` reads and writes task and answer files:
  - `load_sample` reads one task JSON file. The file name must be an
    8-character id followed by `.json`.
  - `read_all` loads every task in a directory, found under the first base
    path that holds it.
  - `Sample.split` gives one sample per test pair.
  - `Writer` writes a CSV submission file.
  - `write_answers_with_scores` and `write_json_answers_with_scores` write
    up to three answers together with their scores.
  - Malformed task files raise `TaskFormatError`.
- `arcgrid.visu` provides these:
  - `Visu`, which logs tasks and image pairs to a text file.
  - `plot`, which renders a grid as a binary PPM image.
  - `format_image` and `print_image`, which show an image as text with `.`
    for colour 0.
- `arcgrid.transforms` provides `erase_col`, `make_border`, `make_border2`,
  `make_border_from`, `compress2`, `compress3`, `connect`, `spread_cols`,
  `split_columns`, `split_rows`, `smear`, `compose_growing` and
  `pick_unique`.
- `arcgrid.score` provides these:
  - `Candidate`. Candidates with a higher score sort first.
  - `score_cands` and `score_answers`.
  - `select_answers`, which picks the best candidates whose test images
    differ from each other.
  - `format_verdict`, which gives a coloured one-line verdict.
- `arcgrid.normalize` provides these:
  - `Simplifier`.
  - `normalize_dummy`, a simplifier that leaves images unchanged.
  - `remap_cols`.
  - `list_cols`.
  - `OrientationPicker`, which chooses a rigid-transform id for each input.

## Example

```python
from arcgrid.image import from_rows
from arcgrid.transforms import compress2, connect

img = from_rows([[0, 1, 0, 1],
                 [0, 0, 0, 0]])
print(connect(img, 0).rows())   # [[0, 0, 1, 0], [0, 0, 0, 0]]: only the filled gap
print(compress2(img).rows())    # [[1, 1]]: all-black rows and columns dropped
```

Transforms that cannot produce a result return the empty "bad" image from
`bad_image()`, which has zero size.

## What the package does not do

The package has no solver and no command-line program:

- Nothing in it searches for combinations of transforms that explain a task's
  training pairs.
- Nothing in it generates candidate answers.
- Nothing in it runs a whole set of tasks from start to finish.

It provides the pieces around such a search: images, task files, transforms,
normalisation, and scoring and selection of candidates built elsewhere.
`OrientationPicker.get_rigid` returns a transform id but does not apply the
rotation or reflection itself.