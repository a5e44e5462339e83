#!/usr/bin/env python3
"""
Точка входа для анализа визиток.

Использование:
    # Обработать все изображения из data/input/
    python scripts/analyze_card.py

    # Обработать конкретное изображение
    python scripts/analyze_card.py path/to/card.jpg

    # Без Google Vision: текст визитки из файла
    python scripts/analyze_card.py path/to/card.jpg --text path/to/card.txt

Результат: data/output/<имя>_<формат>/contact_record.json
"""

import sys
import argparse
import json
from pathlib import Path

from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import validate_config, INPUT_DIR, OUTPUT_DIR, SUPPORTED_IMAGE_FORMATS, DEFAULT_LOCALE
from src.application import CardComponentFactory
from src.domain.contracts import PipelineConfig


def result_dir_for(source: str, output_dir: Path) -> Path:
    """card.jpg → <output>/card_jpg (формат входит в имя директории)."""
    path = Path(source)
    suffix = path.suffix.lstrip(".").lower()
    return output_dir / (f"{path.stem}_{suffix}" if suffix else path.stem)


def save_outcome(outcome, output_dir: Path) -> Path:
    """Сохраняет ContactRecord (или ошибку) в JSON."""
    result_dir = result_dir_for(outcome.source, output_dir)
    result_dir.mkdir(parents=True, exist_ok=True)

    if outcome.succeeded:
        payload = outcome.record.to_dict()
    else:
        payload = {"status": outcome.status, "errorKind": outcome.error_kind, "error": outcome.error}

    result_file = result_dir / "contact_record.json"
    with open(result_file, 'w', encoding='utf-8') as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    return result_file


def collect_images(path_arg) -> list:
    if path_arg:
        image_path = Path(path_arg)
        if not image_path.exists():
            logger.error(f"Файл не найден: {image_path}")
            sys.exit(1)
        return [image_path]

    if not INPUT_DIR.exists():
        logger.error(f"Input директория не найдена: {INPUT_DIR}")
        sys.exit(1)

    return sorted(p for p in INPUT_DIR.iterdir() if p.suffix.lower() in SUPPORTED_IMAGE_FORMATS)


def main():
    """Главная функция анализа визиток."""
    parser = argparse.ArgumentParser(description="Business Card Analyzer")
    parser.add_argument("path", nargs="?", help="Путь к изображению (опционально)")
    parser.add_argument("--text", help="Файл с уже распознанным текстом (без вызова OCR)")
    parser.add_argument("--locale", default=DEFAULT_LOCALE, help="Локаль ключевых слов")
    parser.add_argument("--workers", type=int, default=None, help="Потоки для пачки изображений")
    args = parser.parse_args()

    image_paths = collect_images(args.path)
    if not image_paths:
        logger.warning(f"В директории {INPUT_DIR} не найдены изображения")
        sys.exit(0)

    texts = None
    recognizer = None
    if args.text:
        if len(image_paths) != 1:
            logger.error("--text поддерживается только для одного изображения")
            sys.exit(1)
        texts = [Path(args.text).read_text(encoding='utf-8')]
    else:
        try:
            validate_config()
            logger.info("Конфигурация проверена")
        except ValueError as e:
            logger.error(str(e))
            sys.exit(1)
        recognizer = CardComponentFactory.create_recognizer()

    config = PipelineConfig(max_workers=args.workers) if args.workers else PipelineConfig()

    pipeline = CardComponentFactory.create_pipeline(recognizer=recognizer, config=config, locale_code=args.locale)
    logger.info(f"Обработка {len(image_paths)} изображений")

    try:
        outcomes = pipeline.analyze_all(image_paths, recognized_texts=texts)
    finally:
        if recognizer is not None:
            recognizer.close()

    for outcome in outcomes:
        result_file = save_outcome(outcome, OUTPUT_DIR)
        if outcome.succeeded:
            logger.info(f"✅ {outcome.source} → {result_file}")
        else:
            logger.error(f"❌ {outcome.source}: {outcome.error_kind}")

    success_count = sum(1 for o in outcomes if o.succeeded)
    logger.info(f"ИТОГИ: {success_count}/{len(outcomes)} успешно обработано")
    if success_count != len(outcomes):
        sys.exit(1)


if __name__ == "__main__":
    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="INFO"
    )

    main()
