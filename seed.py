#!/usr/bin/env python3
"""
Seed the ClassCart database with the lesson catalog.

Existing lessons are deleted and replaced by the ten lessons below.
Orders are left untouched.

Usage:
    MONGODB_URI="mongodb+srv://..." python seed.py
    python seed.py --uri mongodb://localhost:27017 --db classcart --keep
"""

import argparse
import os
import sys

from pymongo import MongoClient
from pymongo.errors import PyMongoError

LESSONS = [
    {
        "subject": "Mobile App Development",
        "location": "Birmingham",
        "price": 88.99,
        "availableSpaces": 10,
        "image": "logo-mobile.svg",
        "description": "Learn to build mobile applications for iOS and Android",
    },
    {
        "subject": "Artificial Intelligence & Machine Learning",
        "location": "West-Ham",
        "price": 149.99,
        "availableSpaces": 8,
        "image": "logo-ai-ml.svg",
        "description": "Master AI and ML concepts with hands-on projects",
    },
    {
        "subject": "Cloud Computing with AWS or Azure Lab Course",
        "location": "Newcastle",
        "price": 99.99,
        "availableSpaces": 5,
        "image": "logo-cloud.svg",
        "description": "Learn cloud infrastructure and services",
    },
    {
        "subject": "Cybersecurity Basics",
        "location": "Bristol",
        "price": 250,
        "availableSpaces": 5,
        "image": "logo-cybersecurity.svg",
        "description": "Essential cybersecurity principles and practices",
    },
    {
        "subject": "UI/UX Design Principles",
        "location": "Brentford",
        "price": 220,
        "availableSpaces": 5,
        "image": "logo-figma.svg",
        "description": "Create beautiful and user-friendly interfaces",
    },
    {
        "subject": "Project Management",
        "location": "Manchester",
        "price": 250,
        "availableSpaces": 5,
        "image": "logo-jira.svg",
        "description": "Master project management methodologies",
    },
    {
        "subject": "Computer Science",
        "location": "Villa-park",
        "price": 200,
        "availableSpaces": 10,
        "image": "logo-compsci.svg",
        "description": "Fundamentals of computer science and programming",
    },
    {
        "subject": "Database Design & SQL",
        "location": "Leicester",
        "price": 199,
        "availableSpaces": 7,
        "image": "logo-database.svg",
        "description": "Learn database design and SQL queries",
    },
    {
        "subject": "Backend Development with Node.js",
        "location": "Norwich",
        "price": 209,
        "availableSpaces": 5,
        "image": "logo-node.svg",
        "description": "Build scalable backend applications with Node.js",
    },
    {
        "subject": "Python Programming",
        "location": "Liverpool",
        "price": 150,
        "availableSpaces": 12,
        "image": "logo-python.svg",
        "description": "Learn Python programming from basics to advanced",
    },
]


def main():
    ap = argparse.ArgumentParser(description="Load the lesson catalog into MongoDB.")
    ap.add_argument("--uri", default=os.getenv("MONGODB_URI"), help="MongoDB connection string (default: $MONGODB_URI)")
    ap.add_argument("--db", default=os.getenv("DB_NAME", "classcart"), help="Database name (default: $DB_NAME or classcart)")
    ap.add_argument("--keep", action="store_true", help="Do not delete existing lessons before inserting")
    args = ap.parse_args()

    if not args.uri:
        print("[!] MONGODB_URI is not set and --uri was not given.", file=sys.stderr)
        sys.exit(1)

    client = MongoClient(args.uri)
    try:
        lessons = client[args.db]["lessons"]
        if not args.keep:
            deleted = lessons.delete_many({}).deleted_count
            print(f"[+] Removed {deleted} existing lessons")
        # insert_many adds _id to the dicts it is given
        result = lessons.insert_many([dict(lesson) for lesson in LESSONS])
        print(f"[+] Inserted {len(result.inserted_ids)} lessons")
        lessons.create_index([("subject", "text"), ("location", "text")])
        for index, lesson in enumerate(LESSONS, start=1):
            print(f"    {index}. {lesson['subject']} ({lesson['location']}) - £{lesson['price']}")
    except PyMongoError as exc:
        print(f"[!] Seeding failed: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
