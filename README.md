# gospeak

Building blocks for a speech codec that represents audio as a sequence of
codewords. Each codeword names a centroid in a codebook of phase spectrogram
frames. The package needs no third-party libraries.

## Modules

- `gospeak.bigram`: packs pairs of centroid numbers into tokens
  (`compress_numbers_into_tokens`) and counts which token follows which in
  a TSV alignment file (`build_bigrams`). The count starts from the first
  letter of each word. `next_tokens` lists the tokens seen after a given
  letter or token, and gives an empty list if there is none. `main` is the
  `gospeak-bigram` command.
- `gospeak.tokens`: `unpack_tokens` splits 32-bit tokens into their two
  15-bit fields. `unpad_centroids` drops up to two trailing zero pads and
  subtracts the plus-one offset. `parse_raw_tokens` reads loose token lists
  such as `"[1 2,,3]"` and raises `ValueError` on bad input.
- `gospeak.centroids`: `sample_rate_for_freqs` and `num_freqs_for_sample_rate`
  map between a sample rate and a bin count: 768 bins for 48000 Hz and 836 bins
  for 44100 Hz. `key_coordinates` and `centroid_key_coordinates` compute the
  matching coordinates. `nearest_centroid` and `encode_frames` turn frames into
  codewords, and `centroid_frames` turns codewords back into `(c0, c1, c2)`
  frames. `load_centroids` reads the `Centroids` array of a codebook JSON file.
- `gospeak.lpfloat`: `LPFloat` is a value written with a fixed number of
  decimal digits. `LPFloat.to_json` raises `ValueError` for values that are not
  finite. `dump_centroids_json` writes `{"Centroids": [...]}` with one centroid
  per line. `verify_float` returns its argument unchanged. It prints a warning
  to standard error only if the first value it ever checks is NaN or infinite.
- `gospeak.progress`:
  - `progress_bar` renders a 40-column progress line, and `print_progress`
    redraws it in place.
  - `expand_command` fills `PERCENTAGE`, `STAGE_NUMBER` and `TOTAL_STAGES`
    (optionally prefixed with `%`) into a command line and splits it.
  - `run_command` starts that command. It waits for it only when asked.
  - `Plotter.plot` reports k-means iterations on a 0..96 scale.
- `gospeak.training`: helpers for preparing a codebook training run.
  - `find_audio_files` collects `.flac` and `.wav` files.
  - `which` locates an index across consecutive groups.
  - `stuff_count` and `zero_stuffing` bring low sample rates up to the
    codebook rate.
  - `chunk_plan` picks the chunk count, the clusters per chunk and the master
    cluster count.
  - `is_silence` tests a frame against an energy threshold.
  - `pad_dataset` shuffles a dataset and repeats entries to reach a size.

## Installation

```
pip install .
```

## Building a bigram model

The input is a tab-separated file. The first column holds a word. The second
column holds the space-separated centroid numbers of that word's recording.

```
gospeak-bigram input.tsv bigram.json
```

The output is an indented JSON object with sorted keys. It maps each first
letter or token to the tokens that follow it, with their counts. Called
without exactly two arguments, the command prints a usage line.

## Using the library

```python
from gospeak.bigram import build_bigrams, compress_numbers_into_tokens, next_tokens
from gospeak.tokens import unpack_tokens, unpad_centroids

tokens = compress_numbers_into_tokens(["4", "7", "9"])
model = build_bigrams(["word\t4 7 9"])
followers = next_tokens(model, "w")

indices = unpad_centroids(unpack_tokens(int(t) for t in tokens))
```

## What the package does not do

The package works on phase frames and codewords that have already been
computed. It does not provide the following:

- reading or writing audio files
- converting audio to phase spectrograms or back
- the k-means clustering itself
- a command that encodes or decodes recordings, trains a codebook, or speaks
  text

The only command is `gospeak-bigram`.

## Running the tests

```
pip install ".[test]"
pytest
```