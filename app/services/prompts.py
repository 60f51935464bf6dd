JD_ANALYSIS_PROMPT = """Analyze this job description and extract structured requirements.

Job Description:
{JD_TEXT}

Return a JSON object with this exact structure:
{
  "title": "Job title",
  "company": "Company name if mentioned",
  "required": [
    {"text": "requirement", "type": "skill|experience|education|certification|other", "importance": "critical|high|medium|low"}
  ],
  "preferred": [
    {"text": "requirement", "type": "skill|experience|education|certification|other", "importance": "critical|high|medium|low"}
  ],
  "keywords": ["keyword1", "keyword2"],
  "context": {
    "industry": "industry if identifiable",
    "seniorityLevel": "entry|mid|senior|lead|executive",
    "companyType": "startup|mid-size|enterprise|agency",
    "workStyle": "remote|hybrid|onsite",
    "teamSize": "team size if mentioned"
  }
}

Rules:
- "required" = explicitly stated as required/must-have
- "preferred" = nice-to-have or preferred qualifications
- "keywords" = important terms that should appear in a resume
- importance: critical = dealbreaker, high = strongly preferred, medium = good to have, low = minor bonus
- Extract ALL requirements, not just technical ones
- Include years of experience requirements
- Be comprehensive but don't duplicate"""


FORMAT_PROMPT = """You are reformatting a resume to better match a job description.

CRITICAL RULES:
1. Keep 90%+ of the original text VERBATIM
2. NEVER add metrics or claims not in the original
3. NEVER change the meaning of any bullet
4. Only reorder bullets to front-load matches
5. Only add keywords where they fit naturally
6. Keep all original experiences and dates

Job Title: {JOB_TITLE}
Key Keywords: {KEYWORDS}

Original Resume Bullets (in priority order based on relevance):
{BULLETS}

Return a JSON object with this structure:
{
  "summary": "2-3 sentence professional summary (optional)",
  "skills": ["skill1", "skill2"],
  "experiences": [
    {
      "title": "Job Title",
      "company": "Company",
      "dateRange": "Date Range",
      "bullets": ["bullet1", "bullet2"]
    }
  ]
}

Remember:
- Bullets should be 90%+ identical to originals
- Only minor keyword insertions where natural
- Reorder to highlight matches first
- Do NOT hallucinate new achievements"""


def cover_letter_prompt(name: str, job_title: str, company: str, evidence: str) -> str:
    return f"""Write a brief cover letter for {name} applying to {job_title} at {company}.

THEIR RELEVANT EXPERIENCE:
{evidence}

RULES - READ CAREFULLY:
1. MAX 200 words. Shorter is better.
2. Use contractions: I'm, I've, I'd, don't, can't, won't
3. Mix sentence lengths - some very short (3-5 words), some longer
4. Start ONE sentence with "And" or "But"
5. Be specific about what you did, not vague claims
6. NO buzzwords: passionate, leverage, synergy, excited, thrilled, utilize, spearhead
7. Sound like a confident professional emailing about a job, not a formal letter
8. End simply - "Thanks for reading" or "Happy to chat more" - NOT "I look forward to the opportunity to discuss"

STRUCTURE:
- 1 sentence: Why this role caught your attention (be specific to {company})
- 2-3 sentences: Your most relevant experience (use the facts above)
- 1-2 sentences: Another relevant point
- 1 sentence: Simple close

Start with "Hi," or "Hello," - NOT "Dear Hiring Manager"
Sign off with just "{name}" - no "Sincerely" or "Best regards"

Write the letter now. No preamble:"""


def humanized_cover_letter_prompt(name: str, job_title: str, company: str, evidence: str) -> str:
    return f"""You must write a cover letter that sounds 100% human-written, not AI.

For: {name} applying to {job_title} at {company}

Their experience:
{evidence}

CRITICAL ANTI-AI RULES:
1. Use contractions in EVERY paragraph: I'm, I've, I'd, don't, can't, won't, didn't, wasn't
2. Include ONE minor imperfection - a slightly informal phrase like "honestly" or "I have to say"
3. Vary sentence length DRAMATICALLY:
   - At least one very short sentence (under 6 words). Like this.
   - At least one longer, more detailed sentence that explains something specific
4. Start at least ONE sentence with "And" or "But"
5. Use specific details and numbers from the experience - NOT vague claims
6. ABSOLUTELY BANNED PHRASES (never use these):
   - "passionate about" / "passion for"
   - "excited to" / "thrilled to"
   - "leverage" / "utilize"
   - "synergy" / "dynamic"
   - "I believe I would be a great fit"
   - "unique opportunity"
   - "I am writing to express my interest"
   - "Thank you for considering my application"
7. Keep it under 180 words
8. Sound like you're writing a quick email to someone you respect, not a formal document

FORMAT:
- Start with "Hi," (not Dear Hiring Manager)
- 2-3 short paragraphs
- End with just your name (no "Sincerely" or "Best regards")

Remember: Write like a real person. Imperfect but genuine beats polished but robotic.

Write now:"""
