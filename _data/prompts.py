ANALYSIS_PROMPT: str = """You are a senior software engineer reviewing a commit.
{context}
TASK: Analyze this commit and provide a structured summary explaining:
1. **PURPOSE**: What this change intends to solve or implement
2. **IMPACT**: How it affects the system
3. **OBSERVATIONS**: Important points, risks or considerations

Be concise but informative. Use appropriate technical language.

--- COMMIT MESSAGE ---
{message}

--- CODE DIFF ---
{diff}

--- ANALYSIS ---"""

CHUNK_ANALYSIS_PROMPT: str = """You are a senior software engineer analyzing part of a large commit.
{context}CHUNK: {index}/{total} of the commit

TASK: Analyze ONLY this excerpt and identify:
- Main changes in this chunk
- Specific purpose of the changes
- Relevant technical impact

Be concise. This is only a fragment of a larger commit.

--- COMMIT MESSAGE ---
{message}

--- DIFF CHUNK ---
{diff}

--- CHUNK ANALYSIS ---"""

SUMMARY_PROMPT: str = """You are a senior software engineer consolidating the analyses of a large commit.
{context}
TASK: Based on the analyses of the individual chunks, write a consolidated summary explaining:
1. **PURPOSE**: Overall goal of the commit
2. **IMPACT**: Combined effect of all the changes
3. **OBSERVATIONS**: Important points from the complete analysis

--- COMMIT MESSAGE ---
{message}

--- CHUNK ANALYSES ---
{analyses}

--- CONSOLIDATED SUMMARY ---"""

CONTEXT_LINE: str = "\nCONTEXT: {project_context}\n"

CHUNK_LABEL: str = "**Chunk {index}:**\n{analysis}"

CHUNK_ERROR_PLACEHOLDER: str = "**Error in chunk {index}:** {error}"
