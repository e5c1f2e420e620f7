# gagipress

A library for the marketing side of a small catalogue of self-published
books: keep books, content ideas, scripts, a posting calendar, post metrics
and daily sales in a PostgREST database (such as a Supabase project), read
KDP sales reports, build prompts for idea and script generation, and plan
when to publish.

## Modules

- `gagipress.models` – records and their input forms: `Book` / `BookInput`,
  `ContentIdea` / `ContentIdeaInput`, `ContentScript` / `ContentScriptInput`,
  `ContentCalendar` / `ContentCalendarInput`, `PostMetric` /
  `PostMetricInput`, `BookSale` / `BookSaleInput`, plus `AggregateMetrics`,
  `CorrelationPoint` and `KDPReportRow`. Records are built from API JSON with
  `from_dict()`. Input forms have `validate()`, which raises
  `InvalidInputError` (a `ValueError` carrying the offending `field`), and
  `to_dict()` for the JSON body. `PostMetricInput.engagement_rate()` gives
  likes, comments, shares and saves as a percentage of views (0 when there
  are no views).
- `gagipress.dates` – the `YYYY-MM-DD` date format: `parse_json_date` (JSON
  `null` or `""` give `None`, anything else must be a strict date),
  `dump_json_date` and `format_date`.
- `gagipress.kdp` – `parse_kdp_csv(stream)` reads a KDP sales report from an
  iterable of CSV lines and returns `KDPReportRow` objects. Column names are
  matched case-insensitively among alternatives (`Title` / `Book Title` /
  `Product`, `Date` / `Order Date` / `Transaction Date` / `Sale Date`, …);
  title and date columns are required, otherwise `ValueError` is raised.
  Dates may be `YYYY-MM-DD`, `MM/DD/YYYY`, `DD/MM/YYYY` or `YYYY/MM/DD` and
  become UTC datetimes. `$`, `€` and `,` are stripped from royalties.
  Malformed rows and rows with an unreadable date are skipped with a warning
  printed to standard output.
- `gagipress.prompts` – `idea_prompt` and `script_prompt` build (Italian)
  prompts for generating content ideas and video scripts; `BookNiche` picks
  niche guidelines and the platform (`"tiktok"` or `"instagram"`) picks
  platform specifications. `calculate_relevance_score` scores an idea from a
  base of 50, a genre/type bonus, a book-reference bonus and trend alignment,
  capped at 100.
- `gagipress.rest` – `RestClient(url, anon_key="", service_key="", session=None)`
  sends requests to `<url>/rest/v1/…`, authenticating with the service key
  when set and the anonymous key otherwise. Failed requests and unexpected
  responses raise `RepositoryError`.
- `gagipress.books`, `gagipress.content`, `gagipress.calendar_repo`,
  `gagipress.metrics`, `gagipress.sales` – repositories built on a
  `RestClient`: `BooksRepository`, `ContentRepository`, `CalendarRepository`,
  `MetricsRepository` (including `get_aggregate_metrics`) and
  `SalesRepository`. Books and ideas can be looked up by an ID prefix of at
  least six characters; a shorter prefix raises `ValueError`, no match or an
  ambiguous prefix raises `RepositoryError` (the latter listing the
  candidates).
- `gagipress.optimizer` – `Optimizer.get_optimal_times(days, posts_per_day)`
  gives `TimeSlot`s from tomorrow on, cycling through the peak hours 07, 12,
  19 and 21 with the minute shifting by seven each day; the 12 o'clock slot
  goes to Instagram, the others to TikTok. `default_mix_strategy()` returns a
  `ContentMixStrategy` of content-type shares.
- `gagipress.planner` – `Planner.plan_week(days, posts_per_day)` assigns
  stored scripts to those slots (scripts over 60 seconds go to Instagram) and
  raises `ValueError` when there are not enough scripts;
  `balance_content_mix` orders scripts by ID.
- `gagipress.ui` – a terminal `Spinner`, usable as a context manager, and
  `success`, `error`, `info`, `warning` status lines.

## Examples

Read a KDP report:

```python
from gagipress.kdp import parse_kdp_csv

with open("kdp-report.csv", encoding="utf-8", newline="") as report:
    for row in parse_kdp_csv(report):
        print(row.title, row.order_date, row.royalty)
```

Check an input before sending it:

```python
from gagipress.models import BookInput, InvalidInputError

try:
    BookInput(title="", genre="children").validate()
except InvalidInputError as exc:
    print(exc.field, exc)  # title title is required
```

Look up a book by ID prefix:

```python
from gagipress.books import BooksRepository
from gagipress.rest import RestClient

client = RestClient("https://project.example.com", anon_key="placeholder")
book = BooksRepository(client).get_by_id_prefix("abcdef12")
```

Score an idea and get suggested posting slots:

```python
from gagipress.optimizer import Optimizer
from gagipress.prompts import calculate_relevance_score

score = calculate_relevance_score("educational", "savings", True, 10)  # 95

for slot in Optimizer().get_optimal_times(7, 2):
    print(slot.time, slot.platform)
```

## What it does not do

This is a library only: there is no command-line program and no
configuration loading, so the database URL and keys are passed to
`RestClient` directly. It does not call any text-generation service (the
prompts are only built), does not publish to or read from TikTok or
Instagram, and does not create the database tables it reads and writes.
`Optimizer.analyze_historical_data` only stores past metrics; the suggested
times do not yet depend on them.

## Tests

The test suite uses pytest and responses; both are listed in the `test`
extra.