"""Prompt templates sent to Gemini."""

KNOWLEDGE_CARD_PROMPT = """\
Create the JSON data for a knowledge card based on the post below.
Reply with JSON only, in the same language as the post.

{{
    "title": "An intriguing title that differs from the original and invites a click",
    "summary": "A three-line summary of the key points",
    "category": "Topic category of the post (e.g. Frontend, Backend, CS, Life)",
    "keywords": ["keyword1", "keyword2", "keyword3"]
}}

[Post]
Title: {title}
Board: {board}
Content:
{content}
"""

NOTE_ANALYSIS_PROMPT = """\
You convert photographs of study notes into structured Markdown documents.

## Steps

### Step 1: Identify the content
- Handwritten, printed or mixed
- Language of the note
- Subject area (maths, science, programming, languages, history, ...)

### Step 2: Analyse the structure
- Titles and headers (large or underlined writing)
- Body text, lists and numbered items
- Formulas (convert to LaTeX)
- Diagrams and charts (describe them)
- Highlighted or underlined passages
- Code blocks

### Step 3: Markdown rules
- Headings with # or ## following the note's hierarchy
- Lists with - or 1.
- Emphasis with **bold** or *italic*
- Inline formulas as $E = mc^2$, block formulas as $$\\int_0^1 x^2 dx$$
- Code in fenced blocks with a language tag
- Key concepts as > quote blocks
- Tables as Markdown tables

### Step 4: Metadata
- title: a short, clear title for the note
- summary: two or three lines
- hashtags: 5 to 10 keywords without #
- subject: the detected subject area

## Reply format (JSON only, written in the note's language)
{
  "title": "Note title",
  "content": "## Markdown body...",
  "summary": "Two or three line summary",
  "hashtags": ["keyword1", "keyword2", "keyword3"],
  "subject": "Subject area",
  "confidence": 0.95
}

## Notes
- Mark unreadable parts as [illegible]
- Describe figures as [figure: short description]
- Keep the original structure and flow
- confidence is the overall recognition accuracy between 0 and 1
- If the image is not a note, reply {"title": "", "content": "", "summary": "", "hashtags": [], "subject": "", "confidence": 0}
"""

NOTE_REFINE_PROMPT = """\
The Markdown below was transcribed from a photographed study note and may
contain recognition errors. Fix misread words, broken formulas and formatting
mistakes without adding new content. Keep the note's language.

Reply with JSON only, in the same format:
{{"title": "...", "content": "...", "summary": "...", "hashtags": ["..."], "subject": "...", "confidence": 0.0}}

Title: {title}
Subject: {subject}
Content:
{content}
"""

SCHEDULE_ANALYSIS_PROMPT = """\
You extract every class from an image of a university timetable.

## Steps

### Step 1: Read the grid
- X axis (top): weekday headers (Mon-Fri or 월-금)
- Y axis (left): the time scale, which may be
  - 24-hour: 9, 10, 11, 12, 13, 14, 15...
  - 12-hour: 9, 10, 11, 12, 1, 2, 3, 4... (restarts at 1 after 12)
  - periods: 1st, 2nd, 3rd...

### Step 2: Read each class block
1. Day: the column the block sits in
2. Start time: the scale mark at the top edge of the block
3. End time: the scale mark at the bottom edge of the block
4. Title: the largest text in the block
5. Location: building or room text in the block

### Step 3: Convert times
- Prefer time text printed inside a block, such as "09:30~12:20"
- On a 12-hour scale, 1, 2, 3 after 12 mean 13, 14, 15
- Period reference:
{period_table}

### Step 4: Output JSON
All times in 24-hour HH:MM. day_of_week must be one of 월, 화, 수, 목, 금, 토, 일.

## Reply format (JSON only)
{{
  "schedules": [
    {{
      "title": "Course name",
      "day_of_week": "월",
      "start_time": "09:00",
      "end_time": "11:00",
      "location": "Room or null"
    }}
  ],
  "total_count": 1,
  "notes": "Scale format and anything unusual"
}}

## Notes
- A course held on several days is one item per day
- Measure block height carefully (two rows are two hours)
- If the image is not a timetable, reply {{"schedules": [], "total_count": 0}}
"""
