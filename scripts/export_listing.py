"""
Tomatoscope Listing Export Script

Pages through one of the paginated Rotten Tomatoes listings (in theaters,
upcoming, DVD releases) and saves every movie to a CSV file. The client
fetches one page per call, so this script drives the paging itself and stops
once the reported total is reached or a page comes back empty.

Usage:
    python scripts/export_listing.py in_theaters
    python scripts/export_listing.py new_release_dvds --country GB
    python scripts/export_listing.py upcoming_movies --max-pages 3 --output upcoming.csv
"""
import sys
import pandas as pd
from pathlib import Path
import logging
from tqdm import tqdm
import argparse
from typing import Dict, List, Optional

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from tomatoscope.core.config import settings
from tomatoscope.core.exceptions import TomatoscopeError
from tomatoscope.catalog.client import CatalogClient
from tomatoscope.catalog.models import Movie

logger = logging.getLogger(__name__)


def configure_logging():
    """Sends log records to stdout and to the project log file."""
    settings.ensure_directories()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


LISTINGS = {
    "in_theaters": CatalogClient.get_in_theaters_movies,
    "upcoming_movies": CatalogClient.get_upcoming_movies,
    "current_release_dvds": CatalogClient.get_current_release_dvds,
    "new_release_dvds": CatalogClient.get_new_release_dvds,
    "upcoming_dvds": CatalogClient.get_upcoming_dvds,
}


def movie_to_row(movie: Movie) -> Dict:
    """Flattens a movie into a single CSV row."""
    return {
        'rt_id': movie.id,
        'title': movie.title,
        'year': movie.year,
        'mpaa_rating': movie.mpaa_rating,
        'runtime': movie.runtime,
        'theater_release': movie.release_dates.theater,
        'dvd_release': movie.release_dates.dvd,
        'critics_score': movie.ratings.critics_score,
        'audience_score': movie.ratings.audience_score,
        'imdb_id': movie.alternate_ids.imdb,
        'cast': [c.name for c in movie.abridged_cast],
        'self_link': movie.self_link,
    }


class ListingExporter:
    """Orchestrates the export of one paginated listing."""

    def __init__(self, listing: str, client: Optional[CatalogClient] = None):
        self.listing = listing
        self.client = client or CatalogClient()
        self.fetch_page = LISTINGS[listing]

    def collect(self, country: Optional[str] = None, max_pages: Optional[int] = None) -> List[Movie]:
        """
        Requests successive pages until the listing is exhausted.

        Args:
            country (str, optional): ISO 3166-1 alpha-2 code; None means US data.
            max_pages (int, optional): Stop after this many pages.
        """
        movies: List[Movie] = []
        received = 0
        pages = 0
        with tqdm(desc=f"Fetching {self.listing}", unit="page") as pbar:
            while max_pages is None or pages < max_pages:
                result = self.fetch_page(self.client, country=country, page=pages + 1)
                pbar.update(1)
                if not result.received:
                    break
                pages += 1
                if result.total and pbar.total is None:
                    # The total counts movies, not pages
                    pbar.total = -(-result.total // result.received)
                    pbar.refresh()
                movies.extend(result.items)
                # Dropped rows still count towards the envelope total
                received += result.received
                if not result.total or received >= result.total:
                    break

        logger.info(f"Collected {len(movies)} movies from '{self.listing}' in {pages} page(s).")
        return movies

    def run(self, output_file: Path, country: Optional[str] = None, max_pages: Optional[int] = None):
        """Collects the listing and writes it to `output_file`."""
        movies = self.collect(country=country, max_pages=max_pages)
        df = pd.DataFrame([movie_to_row(m) for m in movies])
        df.to_csv(output_file, index=False)

        logger.info("="*60)
        logger.info(f"Exported {len(df)} movies to: {output_file}")
        logger.info("="*60)


def main():
    """Main execution function with command-line argument parsing."""
    parser = argparse.ArgumentParser(description="Export a paginated Rotten Tomatoes listing to CSV.")
    parser.add_argument('listing', choices=sorted(LISTINGS), help="The listing to export.")
    parser.add_argument('--country', help="ISO 3166-1 alpha-2 country code (defaults to US data).")
    parser.add_argument('--max-pages', type=int, help="Stop after this many pages.")
    parser.add_argument('--output', help="Output file name, written under data/exports/.")
    args = parser.parse_args()
    configure_logging()

    output_file = settings.EXPORTS_DIR / (args.output or f"{args.listing}.csv")

    try:
        exporter = ListingExporter(args.listing)
        exporter.run(output_file, country=args.country, max_pages=args.max_pages)
    except KeyboardInterrupt:
        logger.info("\nInterrupted by user.")
        sys.exit(0)
    except TomatoscopeError as e:
        logger.critical(f"Export failed: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
